import subprocess
import os
import sys


def generator_env(environ, root):
    """Copy of ``environ`` with ``root`` appended to PYTHONPATH."""
    env = dict(environ)
    env["PYTHONPATH"] = os.pathsep.join(
        filter(None, [environ.get("PYTHONPATH"), root]))
    return env


# Workaround for FuseSoC hardcoding generator arguments to an interpreter,
# a script, and a single YAML file.
if __name__ == "__main__":
    root = os.path.dirname(os.path.abspath(__file__))
    res = subprocess.run([sys.executable, "-m", "piso", "gen", sys.argv[1]],
                         env=generator_env(os.environ, root))
    sys.exit(res.returncode)
