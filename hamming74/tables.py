"""
Tabelle di lookup del codice Hamming(7,4).

Le moltiplicazioni matriciali sul campo di due elementi vengono calcolate una
volta sola per tutti i valori possibili e salvate in tuple immutabili, in modo
che codifica e decodifica si riducano a un accesso per indice.

Il prodotto scalare modulo 2 tra un vettore e una riga di una matrice è la
parità dei bit di ``vettore & riga``: per questo entrambe le matrici sono
memorizzate come maschere di bit, una per riga.
"""

import logging
import threading
from collections import namedtuple

from hamming74.fields import NIBBLE_BITS, WORD_BITS

logger = logging.getLogger(__name__)

NIBBLES_NUM = 1 << NIBBLE_BITS
WORDS_NUM = 1 << WORD_BITS

#     (1 0 1 1) | 6
#     (1 1 0 1) | 5
#     (0 0 0 1) | 4
# G = (1 1 1 0) | 3
#     (0 0 1 0) | 2
#     (0 1 0 0) | 1
#     (1 0 0 0) | 0
#
# Rows are listed from bit 0 and each row is stored reversed, so that bit j
# of the mask multiplies bit j of the nibble.
GENERATOR_MATRIX = (
    0b1000,
    0b0100,
    0b0010,
    0b1110,
    0b0001,
    0b1101,
    0b1011,
)

#     (1 0 1 0 1 0 1)
# H = (0 1 1 0 0 1 1)
#     (0 0 0 1 1 1 1)
PARITY_CHECK_MATRIX = (
    0b1010101,
    0b0110011,
    0b0001111,
)

# Rows 4, 2, 1, 0 of G form an identity matrix: these codeword bits carry
# nibble bits 0, 1, 2, 3.
DATA_BIT_POSITIONS = (4, 2, 1, 0)

HammingTables = namedtuple(
    'HammingTables', 'parity, encoding, syndrome_vector, decoding'
)


def pack_bits(bits):
    """Impacchetta una sequenza di bit in un intero, il primo è il meno
    significativo."""
    result = 0
    for i, bit in enumerate(bits):
        result |= bit << i
    return result


def unpack_bits(packed, n):
    return tuple((packed >> i) & 1 for i in range(n))


def gen_parity_table():
    return tuple(bin(byte).count('1') & 1 for byte in range(0x100))


def gen_block_encoding(parity, block):
    return pack_bits(parity[block & row] for row in GENERATOR_MATRIX)


def gen_syndrome_vector(parity, word):
    return pack_bits(parity[word & row] for row in PARITY_CHECK_MATRIX)


def error_for_syndrome(syndrome_vector):
    """
    Restituisce la maschera dell'errore corrispondente a un vettore
    sindrome.

    Le colonne di H sono ordinate in modo che un errore sul bit p del
    codeword produca la sindrome 7 - p; la sindrome nulla indica l'assenza di
    errori.
    """

    if syndrome_vector == 0:
        return 0
    return 1 << (WORD_BITS - syndrome_vector)


def gen_word_decoding(syndrome_table, word):

    corrected = word ^ error_for_syndrome(syndrome_table[word])
    unpacked = unpack_bits(corrected, WORD_BITS)

    return pack_bits(unpacked[pos] for pos in DATA_BIT_POSITIONS)


def generate_tables():
    """
    Genera le quattro tabelle del codice.

    :return: Una HammingTables con la tabella di parità (256 elementi), di
    codifica (16), dei vettori sindrome (128) e di decodifica (128).
    """

    parity = gen_parity_table()
    encoding = tuple(gen_block_encoding(parity, block)
                     for block in range(NIBBLES_NUM))
    syndrome_vector = tuple(gen_syndrome_vector(parity, word)
                            for word in range(WORDS_NUM))
    decoding = tuple(gen_word_decoding(syndrome_vector, word)
                     for word in range(WORDS_NUM))

    return HammingTables(parity, encoding, syndrome_vector, decoding)


_tables = None
_tables_lock = threading.Lock()


def initialize_tables():
    """
    Genera le tabelle se non sono ancora state generate e le restituisce.
    Può essere chiamata più volte e da più thread: la generazione avviene una
    volta sola, dopodiché le tabelle vengono solo lette.
    """

    global _tables

    if _tables is None:
        with _tables_lock:
            if _tables is None:
                _tables = generate_tables()
                logger.debug("Generated Hamming(7,4) lookup tables")

    return _tables


def get_tables():
    return _tables or initialize_tables()
