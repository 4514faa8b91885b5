import random

from hamming74.fields import BYTE_BITS


def iterblocks(iterable, block_size):
    """
    Raggruppa gli elementi di iterable in tuple consecutive di block_size
    elementi. Gli elementi finali che non riempiono un blocco vengono
    scartati.
    """

    it = iter(iterable)
    return zip(*[it] * block_size)


def flip_bit(value: int, position: int) -> int:
    return value ^ (1 << position)


def flip_random_bit(buffer: bytearray, rng: random.Random = random) -> int:
    """
    Inverte un bit scelto a caso all'interno di un buffer non vuoto.

    :param buffer: Il buffer da alterare, modificato sul posto.
    :param rng: Il generatore di numeri casuali da usare.
    :return: La posizione del bit invertito.
    :raises IndexError: se il buffer è vuoto.
    """

    if not buffer:
        raise IndexError('Cannot flip a bit of an empty buffer')

    bit_pos = rng.randrange(len(buffer) * BYTE_BITS)
    index, offset = divmod(bit_pos, BYTE_BITS)
    buffer[index] = flip_bit(buffer[index], offset)

    return bit_pos
