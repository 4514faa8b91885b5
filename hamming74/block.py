import enum

from hamming74.fields import (NIBBLE_BITS, SYNDROME_BITS, WORD_BITS,
                              fixed_width)
from hamming74.tables import error_for_syndrome, get_tables


class BlockStatus(enum.Enum):
    """
    Rappresenta lo stato di un codeword decodificato.

        no_errors   Il codeword è valido, la sindrome è nulla.

        one_error   La sindrome indica un bit alterato, che è stato
                    corretto nella fase di decodifica.

    Non esiste uno stato per gli errori multipli: con più di un bit alterato
    il codeword viene "corretto" verso un altro codeword valido e il nibble
    restituito è sbagliato, senza che questo sia rilevabile.
    """
    no_errors = 0
    one_error = 1


@fixed_width(NIBBLE_BITS, 'Nibble')
def encode_block(nibble: int) -> int:
    """
    Codifica 4 bit secondo Hamming(7,4), restituendo un codeword di 7 bit.

    :param nibble: Il nibble da codificare.
    :return: Il codeword.
    :raises ValueError: se il nibble è più grande di 4 bit.
    """
    return get_tables().encoding[nibble]


@fixed_width(WORD_BITS, 'Codeword')
def compute_syndrome_vector(word: int) -> int:
    """
    Calcola il vettore sindrome di 3 bit di un codeword, nullo se e solo se il
    codeword è valido.
    """
    return get_tables().syndrome_vector[word]


@fixed_width(SYNDROME_BITS, 'Syndrome vector')
def compute_error(syndrome_vector: int) -> int:
    """
    Restituisce la maschera con cui fare lo XOR del codeword per correggerlo:
    0 per la sindrome nulla, altrimenti il solo bit in posizione 7 - sindrome.
    """
    return error_for_syndrome(syndrome_vector)


@fixed_width(WORD_BITS, 'Codeword')
def decode_block(word: int) -> int:
    """
    Decodifica un codeword di 7 bit, correggendo un eventuale bit alterato.

    Il risultato è corretto solo se il codeword differisce al più di un bit
    da quello prodotto dalla codifica.

    :param word: Il codeword da decodificare.
    :return: Il nibble decodificato.
    :raises ValueError: se il codeword è più grande di 7 bit.
    """
    return get_tables().decoding[word]


@fixed_width(WORD_BITS, 'Codeword')
def decode_block_status(word: int) -> (BlockStatus, int):
    """
    Come decode_block, ma restituisce anche un BlockStatus che indica se è
    stata applicata una correzione.
    """

    tables = get_tables()
    status = (BlockStatus.one_error if tables.syndrome_vector[word]
              else BlockStatus.no_errors)

    return status, tables.decoding[word]
