"""
Misura il tempo di codifica e decodifica di un buffer casuale.

    python -m hamming74.benchmark --size 10000000
"""

import argparse
import logging
import random
import time

from hamming74.data import decode_data, encode_data
from hamming74.tables import initialize_tables

logger = logging.getLogger(__name__)


def run_benchmark(size, seed=None):
    """
    Codifica un buffer casuale di size byte e decodifica il risultato.

    :return: Una tupla (secondi di codifica, secondi di decodifica).
    :raises AssertionError: se il buffer decodificato è diverso
    dall'originale.
    """

    rng = random.Random(seed)
    data = bytes(rng.getrandbits(8) for _ in range(size))

    initialize_tables()

    start = time.perf_counter()
    encoded = encode_data(data)
    encoded_at = time.perf_counter()
    decoded = decode_data(encoded)
    end = time.perf_counter()

    assert decoded == data, "Round trip failed"

    return encoded_at - start, end - encoded_at


def main(argv=None):

    parser = argparse.ArgumentParser(
        description='Time Hamming(7,4) encoding and decoding of random data.'
    )
    parser.add_argument('--size', type=int, default=10 ** 6,
                        help='number of random bytes (default: 10^6)')
    parser.add_argument('--seed', type=int, default=None,
                        help='seed for the random data')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO,
                        format="{levelname} in {module}: {message}",
                        style="{")

    encode_secs, decode_secs = run_benchmark(args.size, args.seed)

    logger.info(f"Encoded {args.size} bytes in {encode_secs * 1000:.0f} ms")
    logger.info(f"Decoded {args.size} bytes in {decode_secs * 1000:.0f} ms")
    logger.info(f"Total: {(encode_secs + decode_secs) * 1000:.0f} ms")


if __name__ == '__main__':
    main()
