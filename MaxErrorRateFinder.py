"""
File: MaxErrorRateFinder.py
Description: Finds the maximum bit error rate at which the payload pipeline
             can still successfully deliver messages with a specified confidence level.
"""

import logging

from transmission_messenger.Payload import DEFAULT_CODING, DEFAULT_COMPRESSION
from TransmissionModule import TransmissionModule

logger = logging.getLogger(__name__)

NUMBER_OF_TESTS = 100
CONFIDENCE = 0.95
START_ERROR_RATE = 0.0
INCREASE_PER_STEP = 0.0005


def test_pipeline_for_error_rate(input_bytes, error_rate, confidence, compression=DEFAULT_COMPRESSION,
                                 coding=DEFAULT_CODING, number_of_tests=NUMBER_OF_TESTS, seed=None):
    tests_succeeded = 0
    tests_failed = 0

    for i in range(number_of_tests):
        run_seed = None if seed is None else seed + i
        transmission = TransmissionModule(input_bytes=input_bytes, compression=compression, coding=coding,
                                          per_bit_error_rate=error_rate, seed=run_seed)
        if transmission.lossless:
            tests_succeeded += 1
        else:
            tests_failed += 1

    success_ratio = tests_succeeded / number_of_tests
    logger.info("Error rate %.6f: success rate %.2f", error_rate, success_ratio)

    return tests_failed == 0 or success_ratio >= confidence


def find_max_error_rate(input_bytes, compression=DEFAULT_COMPRESSION, coding=DEFAULT_CODING,
                        confidence=CONFIDENCE, start=START_ERROR_RATE, step=INCREASE_PER_STEP,
                        number_of_tests=NUMBER_OF_TESTS, seed=None):
    # Start from the given rate and work upwards until the pipeline fails
    current_error_rate = start
    max_error_rate = 0.0  # Track the maximum successful error rate

    while current_error_rate <= 1.0:
        if test_pipeline_for_error_rate(input_bytes, current_error_rate, confidence, compression, coding,
                                        number_of_tests, seed):
            max_error_rate = current_error_rate
            current_error_rate += step
        else:
            logger.info("Failed at error rate: %.6f", current_error_rate)
            break

    return max_error_rate


if __name__ == "__main__":
    import os

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

    file_path = os.path.join(os.path.dirname(__file__), "tests", "data", "input_text_short.txt")
    with open(file_path, "rb") as file_handle:
        input_bytes = file_handle.read()

    for coding in ("parity", "hamming", "r3", "r5"):
        max_error_rate = find_max_error_rate(input_bytes, compression="huffman", coding=coding, seed=0)
        print(f"TEST RESULT ({coding}): MAX_ERROR_RATE = {max_error_rate:.6f}")
