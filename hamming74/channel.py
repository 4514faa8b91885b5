"""
Simulazione di un canale rumoroso su cui trasmettere buffer codificati.

Il canale è un canale binario simmetrico: ogni bit trasmesso viene invertito
indipendentemente con probabilità bit_error_rate. In alternativa si può
chiedere di invertire un numero fisso di bit per messaggio, utile per
verificare che un singolo errore venga sempre corretto.

La trasmissione è un processo simpy che dura il ritardo di trasmissione del
messaggio, calcolato a partire dalla sua lunghezza in bit e dalla velocità di
trasmissione del canale.
"""

import logging
import random
from collections import namedtuple
from typing import Optional

import simpy

from hamming74.fields import BYTE_BITS
from hamming74.utils import flip_bit

logger = logging.getLogger(__name__)


TransmittedMessage = namedtuple('TransmittedMessage',
                                'value, transmission_delay, flipped_bits')


def make_transmission_delay(transmission_speed: float, msg_length: int) -> int:
    """
    Calcola il ritardo di trasmissione di un messaggio a partire dalla
    velocità di trasmissione e dalla sua lunghezza.

    :param transmission_speed: La velocità di trasmissione, in bit per unità
    di tempo di simulazione.
    :param msg_length: La lunghezza del messaggio in bit.
    :return: Il ritardo di trasmissione.
    """
    return max(int(msg_length / transmission_speed), 1)


class NoisyChannel:

    _logging_formatter = logging.Formatter(
        fmt="[{env.now:0>3}] {levelname} in {module}: {message}", style="{"
    )

    def __init__(self, env: simpy.Environment=None, bit_error_rate=0.0,
                 flips_per_message: Optional[int]=None, transmission_speed=8,
                 rng: random.Random=None):
        """
        Inizializza un canale.

        :param env: L'ambiente simpy in cui eseguire le trasmissioni.
        :param bit_error_rate: La probabilità che un singolo bit venga
        invertito.
        :param flips_per_message: Se specificato, il numero di bit distinti
        invertiti in ogni messaggio (al più la sua lunghezza in bit);
        bit_error_rate viene ignorato.
        :param transmission_speed: I bit trasmessi per unità di tempo.
        :param rng: Il generatore di numeri casuali da usare.
        """

        if not 0.0 <= bit_error_rate <= 1.0:
            raise ValueError('Bit error rate must be between 0 and 1')

        if flips_per_message is not None and flips_per_message < 0:
            raise ValueError('Number of flips must not be negative')

        if transmission_speed <= 0:
            raise ValueError('Transmission speed must be positive')

        self.env = env or simpy.Environment()
        self.bit_error_rate = bit_error_rate
        self.flips_per_message = flips_per_message
        self.transmission_speed = transmission_speed
        self.rng = rng or random.Random()

        self.sent_messages = 0
        self.flipped_bits = 0

    def __str__(self):
        return "<NoisyChannel>"

    def _damage(self, buffer: bytearray) -> int:

        nbits = len(buffer) * BYTE_BITS

        if self.flips_per_message is not None:
            positions = self.rng.sample(range(nbits),
                                        min(self.flips_per_message, nbits))
        else:
            positions = [bit_pos for bit_pos in range(nbits)
                         if self.rng.random() < self.bit_error_rate]

        for bit_pos in positions:
            index, offset = divmod(bit_pos, BYTE_BITS)
            buffer[index] = flip_bit(buffer[index], offset)

        return len(positions)

    def _send_proc(self, data):

        buffer = bytearray(data)
        delay = make_transmission_delay(self.transmission_speed,
                                        len(buffer) * BYTE_BITS)

        logger.debug(f"{self}: sending {len(buffer)} bytes")

        yield self.env.timeout(delay)

        flipped = self._damage(buffer)

        self.sent_messages += 1
        self.flipped_bits += flipped

        if flipped:
            logger.info(f"{self}: {flipped} bits flipped during transmission")

        return TransmittedMessage(bytes(buffer), delay, flipped)

    def send(self, data) -> simpy.Process:
        """
        Avvia la trasmissione di un buffer.

        :param data: Il buffer da trasmettere, che non viene modificato.
        :return: Il processo simpy della trasmissione, il cui valore è un
        TransmittedMessage con la copia del buffer ricevuta.
        """
        return self.env.process(self._send_proc(data))

    def transmit(self, data) -> TransmittedMessage:
        """Trasmette un buffer ed esegue la simulazione fino alla ricezione."""
        proc = self.send(data)
        self.env.run(until=proc)
        return proc.value

    def configure_log_handler(self, handler):

        handler.setFormatter(self._logging_formatter)

        env = self.env

        def env_filter(record):
            record.env = env
            return True

        handler.addFilter(env_filter)

    def configure_root_logger(self, **kwargs):

        logging.basicConfig(**kwargs)

        for handler in logging.getLogger().handlers:
            self.configure_log_handler(handler)
