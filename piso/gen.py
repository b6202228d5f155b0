import logging

from .core import *

from amaranth.back import verilog
from fusesoc.capi2.generator import Generator


logger = logging.getLogger(__name__)


class PisoGenerator(Generator):
    output_file = "piso.v"

    def __init__(self):
        super().__init__()
        self.width = self.config.get('width', 8)

    def run(self):
        files = self.gen_core()
        self.add_files(files)

    # Generate a core to be included in another project.
    def gen_core(self):
        m = Serializer(self.width)

        ios = [m.rst_n, m.data_in, m.valid_in, m.serial_out, m.valid_out,
               m.busy]

        logger.info("generating %d-bit serializer into %s", self.width,
                    self.output_file)
        with open(self.output_file, "w") as fp:
            fp.write(str(verilog.convert(m, name="piso", ports=ios)))

        return [{self.output_file: {"file_type": "verilogSource"}}]
