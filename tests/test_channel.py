import io
import logging
import random
import unittest

import simpy

from hamming74 import NoisyChannel, decode_string, encode_string
from hamming74.channel import make_transmission_delay
from hamming74.benchmark import main, run_benchmark


class TestNoisyChannel(unittest.TestCase):

    def setUp(self):
        self.env = simpy.Environment()
        self.rng = random.Random(2024)

    def test_noiseless(self):

        channel = NoisyChannel(self.env, rng=self.rng)
        data = encode_string("Slim shady")

        received = channel.transmit(data)

        self.assertEqual(received.value, data)
        self.assertEqual(received.flipped_bits, 0)
        self.assertEqual(received.transmission_delay,
                         make_transmission_delay(8, len(data) * 8))
        self.assertEqual(self.env.now, received.transmission_delay)

    def test_every_bit_flipped(self):

        channel = NoisyChannel(self.env, bit_error_rate=1.0, rng=self.rng)
        received = channel.transmit(b'\x00\x0f\xff')

        self.assertEqual(received.value, b'\xff\xf0\x00')
        self.assertEqual(received.flipped_bits, 24)

    def test_single_error_is_corrected(self):

        channel = NoisyChannel(self.env, flips_per_message=1, rng=self.rng)

        for _ in range(20):
            for s in ("f", "aba", "Push me and the just touch me"):

                data = encode_string(s)
                received = channel.transmit(data)

                self.assertEqual(received.flipped_bits, 1)
                self.assertNotEqual(received.value, data)
                self.assertEqual(decode_string(received.value), s)

        self.assertEqual(channel.sent_messages, 60)
        self.assertEqual(channel.flipped_bits, 60)

    def test_empty_message(self):

        channel = NoisyChannel(self.env, flips_per_message=1, rng=self.rng)
        received = channel.transmit(b'')

        self.assertEqual((received.value, received.flipped_bits), (b'', 0))
        self.assertEqual(received.transmission_delay, 1)

    def test_input_is_not_modified(self):

        channel = NoisyChannel(self.env, bit_error_rate=1.0, rng=self.rng)
        data = bytearray(b'abc')

        channel.transmit(data)

        self.assertEqual(data, bytearray(b'abc'))

    def test_concurrent_transmissions(self):

        channel = NoisyChannel(self.env, transmission_speed=4, rng=self.rng)

        short = channel.send(bytes(1))
        long = channel.send(bytes(4))
        self.env.run()

        self.assertEqual(short.value.transmission_delay, 2)
        self.assertEqual(long.value.transmission_delay, 8)
        self.assertEqual(self.env.now, 8)

    def test_invalid_parameters(self):

        with self.assertRaises(ValueError):
            NoisyChannel(self.env, bit_error_rate=1.5)
        with self.assertRaises(ValueError):
            NoisyChannel(self.env, flips_per_message=-1)
        with self.assertRaises(ValueError):
            NoisyChannel(self.env, transmission_speed=0)

    def test_fixed_flips_are_distinct(self):

        channel = NoisyChannel(self.env, flips_per_message=2,
                               rng=random.Random(0))

        for _ in range(200):
            received = channel.transmit(b'\x00')

            self.assertEqual(received.flipped_bits, 2)
            self.assertEqual(bin(received.value[0]).count('1'), 2)

        self.assertEqual(channel.flipped_bits, 400)

    def test_fixed_flips_capped_by_message_length(self):

        channel = NoisyChannel(self.env, flips_per_message=20, rng=self.rng)
        received = channel.transmit(b'\x00\x00')

        self.assertEqual(received.value, b'\xff\xff')
        self.assertEqual(received.flipped_bits, 16)

    def test_configure_root_logger(self):

        channel = NoisyChannel(self.env, flips_per_message=1, rng=self.rng)
        root = logging.getLogger()
        saved_handlers = root.handlers[:]
        saved_level = root.level
        stream = io.StringIO()

        root.handlers = []

        try:
            channel.configure_root_logger(level=logging.INFO, stream=stream)
            handlers = root.handlers[:]

            channel.transmit(bytes(1))
        finally:
            for handler in root.handlers:
                handler.close()
            root.handlers = saved_handlers
            root.setLevel(saved_level)

        self.assertEqual(len(handlers), 1)
        self.assertIs(handlers[0].formatter, NoisyChannel._logging_formatter)
        self.assertEqual(len(handlers[0].filters), 1)
        self.assertEqual(
            stream.getvalue(),
            "[001] INFO in channel: <NoisyChannel>: 1 bits flipped during "
            "transmission\n"
        )

    def test_log_handler(self):

        channel = NoisyChannel(self.env, flips_per_message=1, rng=self.rng)
        stream = io.StringIO()
        handler = logging.StreamHandler(stream)
        channel.configure_log_handler(handler)

        logger = logging.getLogger('hamming74.channel')
        old_level = logger.level
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)

        try:
            channel.transmit(bytes(2))
        finally:
            logger.removeHandler(handler)
            logger.setLevel(old_level)

        self.assertEqual(
            stream.getvalue(),
            "[002] INFO in channel: <NoisyChannel>: 1 bits flipped during "
            "transmission\n"
        )


class TestBenchmark(unittest.TestCase):

    def test_run_benchmark(self):

        encode_secs, decode_secs = run_benchmark(1000, seed=1)

        self.assertGreaterEqual(encode_secs, 0)
        self.assertGreaterEqual(decode_secs, 0)

    def test_main(self):
        main(['--size', '100', '--seed', '3'])


if __name__ == '__main__':
    unittest.main()
