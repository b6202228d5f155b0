import importlib
import sys

from amaranth import *
from amaranth.build import *
from amaranth_boards import icebreaker

from fusesoc.config import Config
from fusesoc.coremanager import CoreManager
from fusesoc.vlnv import Vlnv


class Top(Elaboratable):
    def __init__(self, serializer):
        self.serializer = serializer

    def elaborate(self, platform):
        serial_pin = platform.request("serial_out", 0)
        led_busy = platform.request("led", 0)
        btn = platform.request("button", 0)

        # ~2.9 Hz bit clock from the 12 MHz oscillator, slow enough to watch.
        divider = Signal(22)
        word = Signal.like(self.serializer.data_in)

        ###

        m = Module()
        m.domains += ClockDomain("slow", local=True)
        m.submodules.serializer = ser = DomainRenamer("slow")(self.serializer)

        m.d.sync += divider.eq(divider + 1)
        m.d.comb += [
            ClockSignal("slow").eq(divider[-1]),
            ser.rst_n.eq(~btn.i),
            ser.data_in.eq(word),
            ser.valid_in.eq(~ser.busy),
            serial_pin.o.eq(ser.serial_out),
            led_busy.o.eq(ser.busy)
        ]

        with m.If(~ser.busy):
            m.d.slow += word.eq(word + 1)

        return m


class FuseSocImporter:
    def __init__(self):
        self.cfg = Config()
        self.cm = CoreManager(self.cfg)

        for library in self.cfg.libraries:
            self.cm.add_library(library, [])

    def import_(self, name):
        vlnv = Vlnv(name)
        core = self.cm.get_core(vlnv)

        # To be reworked. Need a consistent way to refer to fusesoc python
        # modules inside the core config?
        module = core.get_files({})[0]["name"]
        # Can files_root be repurposed for "path to the module"?
        sys.path.append(core.files_root)

        # Return namespace exposed by __init__.py
        return importlib.import_module(module)


if __name__ == "__main__":
    importer = FuseSocImporter()
    serializer = importer.import_("piso:amaranth:piso").Serializer(8)
    top = Top(serializer)

    p = icebreaker.ICEBreakerPlatform()
    p.add_resources([
        Resource("serial_out", 0, Pins("1", dir="o", conn=("pmod", 0)),
                 Attrs(IO_STANDARD="SB_LVCMOS"))
    ])
    plan = p.build(top, do_build=False, debug_verilog=True)
    products = plan.execute_local(run_script=True)
    p.toolchain_program(products, "top")
