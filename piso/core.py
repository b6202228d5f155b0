from amaranth import *


class Serializer(Elaboratable):
    """
    Parallel-in, serial-out shift register.

    A word on data_in is accepted on the first clock edge where valid_in is
    high and no transfer is in progress. Its bits are then driven on
    serial_out LSB first, one per clock, while valid_out/busy stay high.
    Words presented while busy are ignored.

    rst_n is an asynchronous, active-low reset. It clears the state as soon
    as it goes low and holds it there regardless of the clock.
    """
    def __init__(self, width=8):
        if not isinstance(width, int) or width < 1:
            raise ValueError(f"width must be a positive integer, not {width!r}")

        self.width = width

        self.rst_n = Signal(1, init=1)

        self.data_in = Signal(width)
        self.valid_in = Signal(1)

        self.serial_out = Signal(1)
        self.valid_out = Signal(1)
        self.busy = Signal(1)

        # State. tx_done is derived from the counter, never stored.
        self.tx_data = Signal(width)
        self.tx_bit_cntr = Signal(range(width + 1))
        self.tx_in_progress = Signal(1)
        self.tx_done = Signal(1)

    def elaborate(self, platform):
        cd_tx = ClockDomain("tx", async_reset=True, local=True)

        ###

        m = Module()
        m.domains += cd_tx

        m.d.comb += [
            cd_tx.clk.eq(ClockSignal("sync")),
            cd_tx.rst.eq(~self.rst_n),

            self.tx_done.eq(self.tx_bit_cntr == self.width),
            self.serial_out.eq(self.tx_data[0]),
            self.valid_out.eq(self.tx_in_progress),
            self.busy.eq(self.tx_in_progress)
        ]

        with m.If(~self.tx_in_progress & self.valid_in):
            # The accept edge already counts as the first bit.
            m.d.tx += [
                self.tx_data.eq(self.data_in),
                self.tx_in_progress.eq(1),
                self.tx_bit_cntr.eq(1)
            ]
        with m.Elif(self.tx_in_progress & ~self.tx_done):
            m.d.tx += [
                self.tx_data.eq(self.tx_data >> 1),
                self.tx_bit_cntr.eq(self.tx_bit_cntr + 1)
            ]
        with m.Elif(self.tx_done):
            m.d.tx += [
                self.tx_in_progress.eq(0),
                self.tx_bit_cntr.eq(0)
            ]

        return m
