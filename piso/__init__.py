# Cores we want to share with the world. Importers (see demos/imp) only see
# what is exposed here.
from .core import *
from .model import *
