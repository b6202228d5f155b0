import logging

from .core import *

from amaranth.sim import Simulator


logger = logging.getLogger(__name__)

CLK_PERIOD = 1.0 / 12e6


class SerializerDriver:
    """Drives a Serializer from inside an Amaranth testbench.

    Inputs are presented before each clock edge; outputs are read back
    after the edge, once the design has settled.
    """
    def __init__(self, ctx, dut):
        self.ctx = ctx
        self.dut = dut

    def assert_reset(self):
        # Takes effect immediately, no clock edge needed.
        self.ctx.set(self.dut.rst_n, 0)

    def release_reset(self):
        self.ctx.set(self.dut.rst_n, 1)

    async def reset(self, cycles=1):
        """Pulse reset low for at least ``cycles`` clock edges."""
        self.assert_reset()
        for _ in range(cycles):
            await self.ctx.tick()
        self.release_reset()

    async def tick(self, data_in=0, valid_in=False):
        self.ctx.set(self.dut.data_in, data_in)
        self.ctx.set(self.dut.valid_in, valid_in)
        await self.ctx.tick()

    def serial_bit(self):
        return self.ctx.get(self.dut.serial_out)

    def valid_out(self):
        return self.ctx.get(self.dut.valid_out)

    def busy(self):
        return self.ctx.get(self.dut.busy)

    async def wait_idle(self):
        while self.busy():
            await self.tick()

    async def send(self, word):
        """Send one word and collect it from the serial line.

        Returns the list of bits observed, LSB first.
        """
        await self.wait_idle()
        await self.tick(word, True)

        bits = []
        while self.busy():
            bits.append(self.serial_bit())
            await self.tick()

        logger.debug("sent %#x, observed bits %s", word, bits)
        return bits


def bits_to_word(bits):
    word = 0
    for i, bit in enumerate(bits):
        word |= bit << i
    return word


def sim_serializer(width=8, words=(0x10, 0x80, 0x07), vcd=True):
    words = [w & ((1 << width) - 1) for w in words]
    serializer = Serializer(width)
    sim = Simulator(serializer)
    sim.add_clock(CLK_PERIOD)

    received = []

    async def send_proc(ctx):
        drv = SerializerDriver(ctx, serializer)
        await drv.reset()

        for word in words:
            received.append(bits_to_word(await drv.send(word)))

        assert not drv.busy()

    sim.add_testbench(send_proc)

    if vcd:
        with sim.write_vcd("serializer.vcd", "serializer.gtkw"):
            sim.run()
    else:
        sim.run()

    for sent, got in zip(words, received):
        logger.info("word %#x -> %#x", sent, got)

    return received


def sim_reset(width=8, vcd=True):
    serializer = Serializer(width)
    sim = Simulator(serializer)
    sim.add_clock(CLK_PERIOD)

    async def reset_proc(ctx):
        drv = SerializerDriver(ctx, serializer)
        await drv.reset()

        await drv.tick((1 << width) - 1, True)
        await drv.tick()
        assert drv.busy()

        # Pull reset between two clock edges.
        await ctx.delay(CLK_PERIOD / 4)
        drv.assert_reset()
        await ctx.delay(CLK_PERIOD / 4)
        assert not drv.busy()
        assert ctx.get(serializer.tx_data) == 0

        await drv.tick((1 << width) - 1, True)
        assert not drv.busy()

        drv.release_reset()
        await drv.tick()
        logger.info("asynchronous reset held the serializer idle")

    sim.add_testbench(reset_proc)

    if vcd:
        with sim.write_vcd("reset.vcd", "reset.gtkw"):
            sim.run()
    else:
        sim.run()
