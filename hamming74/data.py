"""
Codifica di buffer di byte e di stringhe.

Ogni byte viene diviso in due nibble (prima quello alto, poi quello basso),
ciascuno codificato in un codeword di 7 bit; i codeword vengono impacchettati
uno dopo l'altro senza padding, quindi n byte occupano esattamente 14 * n
bit, arrotondati al byte successivo.
"""

import logging

from hamming74.bitstream import START, BitWriter, bits_left, iter_words
from hamming74.fields import NIBBLE_BITS, WORD_BITS
from hamming74.tables import get_tables
from hamming74.utils import iterblocks

logger = logging.getLogger(__name__)

_LOW_NIBBLE = (1 << NIBBLE_BITS) - 1


def encode_data(data) -> bytes:
    """
    Codifica un buffer di byte secondo Hamming(7,4).

    :param data: Un oggetto bytes-like o un iterabile di interi tra 0 e 255.
    :return: Il buffer codificato.
    :raises TypeError: se data non è un buffer o un iterabile di interi.
    """

    if isinstance(data, (int, str)):
        raise TypeError("Data must be bytes-like or an iterable of ints")

    encoding = get_tables().encoding
    writer = BitWriter()

    for byte in bytes(data):
        writer.put_word(encoding[byte >> NIBBLE_BITS])
        writer.put_word(encoding[byte & _LOW_NIBBLE])

    return writer.getvalue()


def decode_data(data) -> bytes:
    """
    Decodifica un buffer prodotto da encode_data, correggendo al più un bit
    alterato per ogni codeword.

    I bit finali che non formano un codeword intero, e un eventuale codeword
    finale senza il suo compagno, vengono ignorati. Il risultato su buffer
    non prodotti da encode_data non è definito.

    :param data: Il buffer codificato.
    :return: Il buffer decodificato, lungo len(data) * 8 // 14 byte.
    """

    decoding = get_tables().decoding
    data = bytes(data)

    words = list(iter_words(data))

    trailing_bits = bits_left(data, START) - len(words) * WORD_BITS
    if trailing_bits:
        logger.debug(f"Discarding {trailing_bits} trailing bits")
    if len(words) % 2:
        logger.debug("Discarding unpaired trailing codeword")

    return bytes((decoding[high] << NIBBLE_BITS) | decoding[low]
                 for high, low in iterblocks(words, 2))


def encode_string(text: str, encoding='utf-8', errors='strict') -> bytes:
    return encode_data(text.encode(encoding, errors))


def decode_string(data, encoding='utf-8', errors='strict') -> str:
    """
    Decodifica un buffer prodotto da encode_string.

    :raises UnicodeDecodeError: se i byte decodificati non sono validi nella
    codifica scelta e errors è 'strict'.
    """
    return decode_data(data).decode(encoding, errors)
