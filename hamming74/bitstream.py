"""
Lettura e scrittura di parole di lunghezza arbitraria in un flusso di byte,
senza padding tra una parola e la successiva.

I bit vengono disposti a partire dal meno significativo di ogni byte: il bit
i di una parola scritta alla posizione p del flusso finisce nel bit
(p + i) % 8 del byte (p + i) // 8.
"""

from collections import namedtuple

from hamming74.fields import BYTE_BITS, WORD_BITS, check_width


class BitCursor(namedtuple('BitCursor', 'byte_index, bit_offset')):
    """
    Posizione all'interno di un flusso di bit, espressa come indice del byte
    e scostamento del bit nel byte (sempre compreso tra 0 e 7).
    """

    __slots__ = ()

    @property
    def bit_position(self):
        return self.byte_index * BYTE_BITS + self.bit_offset

    def advance(self, n):
        return BitCursor(*divmod(self.bit_position + n, BYTE_BITS))


START = BitCursor(0, 0)


def bits_left(buffer, cursor: BitCursor) -> int:
    return len(buffer) * BYTE_BITS - cursor.bit_position


def write_bits(buffer: bytearray, cursor: BitCursor, value: int,
               n: int) -> BitCursor:
    """
    Scrive gli n bit di value a partire dal cursore, aggiungendo byte in
    coda al buffer quando necessario; se il cursore è oltre la fine del
    buffer, i byte mancanti vengono aggiunti nulli.

    I bit del buffer a partire dal cursore devono essere nulli: la scrittura
    avviene tramite OR.

    :param buffer: Il buffer in cui scrivere.
    :param cursor: La posizione da cui iniziare la scrittura.
    :param value: Il valore da scrivere.
    :param n: Il numero di bit da scrivere.
    :return: Il cursore avanzato di n bit.
    :raises ValueError: se value è più lungo di n bit.
    """

    check_width(value, n)

    index, offset = cursor
    written = 0

    while written < n:

        while index >= len(buffer):
            buffer.append(0)

        chunk = min(BYTE_BITS - offset, n - written)
        buffer[index] |= ((value >> written) & ((1 << chunk) - 1)) << offset

        written += chunk
        offset += chunk

        if offset == BYTE_BITS:
            index, offset = index + 1, 0

    return BitCursor(index, offset)


def read_bits(buffer, cursor: BitCursor, n: int) -> (int, BitCursor):
    """
    Legge n bit a partire dal cursore, eventualmente a cavallo di più byte.

    :return: Il valore letto e il cursore avanzato di n bit.
    :raises IndexError: se nel buffer restano meno di n bit.
    """

    if bits_left(buffer, cursor) < n:
        raise IndexError('Not enough bits left in buffer')

    index, offset = cursor
    value = 0
    read = 0

    while read < n:

        chunk = min(BYTE_BITS - offset, n - read)
        value |= ((buffer[index] >> offset) & ((1 << chunk) - 1)) << read

        read += chunk
        offset += chunk

        if offset == BYTE_BITS:
            index, offset = index + 1, 0

    return value, BitCursor(index, offset)


def put_word(buffer: bytearray, cursor: BitCursor, word: int) -> BitCursor:
    return write_bits(buffer, cursor, word, WORD_BITS)


def get_word(buffer, cursor: BitCursor) -> (int, BitCursor):
    return read_bits(buffer, cursor, WORD_BITS)


def iter_words(buffer, cursor: BitCursor = START):
    """
    Estrae parole di 7 bit consecutive finché ne restano abbastanza: i bit
    finali che non formano una parola intera vengono scartati.
    """

    while bits_left(buffer, cursor) >= WORD_BITS:
        word, cursor = get_word(buffer, cursor)
        yield word


class BitWriter:

    def __init__(self, buffer: bytearray = None):
        self.buffer = buffer if buffer is not None else bytearray()
        self.cursor = BitCursor(len(self.buffer), 0)

    def write_bits(self, value, n):
        self.cursor = write_bits(self.buffer, self.cursor, value, n)

    def put_word(self, word):
        self.write_bits(word, WORD_BITS)

    def getvalue(self) -> bytes:
        return bytes(self.buffer)


class BitReader:

    def __init__(self, buffer, cursor: BitCursor = START):
        self.buffer = buffer
        self.cursor = cursor

    def bits_left(self):
        return bits_left(self.buffer, self.cursor)

    def read_bits(self, n):
        value, self.cursor = read_bits(self.buffer, self.cursor, n)
        return value

    def get_word(self):
        return self.read_bits(WORD_BITS)

    def __iter__(self):
        while self.bits_left() >= WORD_BITS:
            yield self.get_word()
