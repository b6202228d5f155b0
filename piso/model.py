class SerializerModel:
    """Cycle-level reference model of :class:`~piso.core.Serializer`.

    Each call to :meth:`tick` corresponds to one rising clock edge of the
    RTL, :meth:`reset` to driving ``rst_n`` low. The output methods return
    what the RTL drives combinationally after that edge.
    """

    def __init__(self, width: int = 8):
        if not isinstance(width, int) or width < 1:
            raise ValueError(f"width must be a positive integer, not {width!r}")

        self.width = width
        self._mask = (1 << width) - 1
        self.reset()

    @property
    def tx_data(self) -> int:
        return self._tx_data

    @property
    def tx_bit_cntr(self) -> int:
        return self._tx_bit_cntr

    @property
    def tx_in_progress(self) -> bool:
        return self._tx_in_progress

    @property
    def tx_done(self) -> bool:
        return self._tx_bit_cntr == self.width

    def reset(self):
        self._tx_data = 0
        self._tx_bit_cntr = 0
        self._tx_in_progress = False

    def tick(self, data_in: int = 0, valid_in: bool = False):
        """Advance the model by one clock edge.

        Args:
            data_in (int): Parallel word. Bits above ``width`` are dropped.
            valid_in (bool): Strobe qualifying ``data_in``.
        """
        if not self._tx_in_progress and valid_in:
            self._tx_data = data_in & self._mask
            self._tx_in_progress = True
            self._tx_bit_cntr = 1
        elif self._tx_in_progress and not self.tx_done:
            self._tx_data >>= 1
            self._tx_bit_cntr += 1
        elif self.tx_done:
            self._tx_in_progress = False
            self._tx_bit_cntr = 0

    def serial_bit(self) -> bool:
        return bool(self._tx_data & 1)

    def valid_out(self) -> bool:
        return self._tx_in_progress

    def busy(self) -> bool:
        return self._tx_in_progress

    def send(self, word: int) -> list[int]:
        """Accept ``word`` and run the transfer to completion.

        Waits out any transfer already in flight first.

        Returns:
            list[int]: The bits seen on the serial line, LSB first.
        """
        while self.busy():
            self.tick()

        self.tick(word, True)

        bits = []
        while self.busy():
            bits.append(int(self.serial_bit()))
            self.tick()

        return bits
