"""
Questo package contiene le funzioni per codificare e decodificare messaggi
in Hamming 7-4.

Un messaggio codificato in Hamming può essere decodificato anche se ha un bit
alterato per ogni codeword. La codifica 7-4 usa 7 bit per codificare 4 bit di
informazioni; un byte diventa quindi due codeword, impacchettati senza
padding nel buffer codificato.

Con due o più bit alterati nello stesso codeword la decodifica restituisce un
valore sbagliato senza alcuna segnalazione: il codice corregge un errore ma
non ne rileva due.

Le tabelle di lookup vengono generate al primo utilizzo; initialize_tables
permette di generarle in anticipo.
"""

from hamming74.tables import initialize_tables
from hamming74.block import (encode_block, compute_syndrome_vector,
                             compute_error, decode_block, decode_block_status,
                             BlockStatus)
from hamming74.bitstream import (BitCursor, BitReader, BitWriter, put_word,
                                 get_word, iter_words, read_bits, write_bits)
from hamming74.data import (encode_data, decode_data, encode_string,
                            decode_string)
from hamming74.channel import NoisyChannel, TransmittedMessage

no_errors = BlockStatus.no_errors
one_error = BlockStatus.one_error
