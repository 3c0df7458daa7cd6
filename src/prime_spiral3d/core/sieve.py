"""Prime number generation using the Sieve of Eratosthenes.

All helpers share one NumPy boolean sieve so the prime set, the mask and
the sorted prime array always agree for a given bound.
"""

from __future__ import annotations

import logging

import numpy as np

logger = logging.getLogger(__name__)


def prime_sieve_mask(limit: int) -> np.ndarray:
    """Generate a boolean mask where mask[i] is True if i is prime.

    Args:
        limit: Largest integer covered by the mask (inclusive).

    Returns:
        Boolean array of length limit + 1 (all False when limit < 2).
    """
    if limit < 2:
        return np.zeros(max(limit + 1, 0), dtype=bool)

    is_prime = np.ones(limit + 1, dtype=bool)
    is_prime[0] = False
    is_prime[1] = False

    for i in range(2, int(np.sqrt(limit)) + 1):
        if is_prime[i]:
            is_prime[i*i::i] = False

    return is_prime


def generate_primes(limit: int) -> np.ndarray:
    """Generate all prime numbers up to and including limit.

    Args:
        limit: Upper bound for prime generation (inclusive).

    Returns:
        Sorted int64 array of primes; empty when limit < 2.
    """
    if limit < 2:
        return np.array([], dtype=np.int64)

    return np.nonzero(prime_sieve_mask(limit))[0].astype(np.int64)


def sieve(limit: int) -> set[int]:
    """Return the set of primes in [2, limit].

    Args:
        limit: Upper bound (inclusive).

    Returns:
        Set of prime integers; empty when limit < 2.
    """
    primes = {int(p) for p in generate_primes(limit)}
    logger.debug("Sieved %d primes up to %d", len(primes), limit)
    return primes


def count_primes(limit: int) -> int:
    """Count prime numbers up to limit.

    Args:
        limit: Upper bound for counting.

    Returns:
        Number of primes <= limit.
    """
    if limit < 2:
        return 0

    return int(prime_sieve_mask(limit).sum())


def prime_density(limit: int) -> float:
    """Fraction of the integers 1..limit that are prime."""
    if limit <= 0:
        return 0.0
    return count_primes(limit) / limit


def is_prime(n: int) -> bool:
    """Check if a single number is prime.

    Uses 6k +/- 1 optimization for efficiency.

    Args:
        n: Number to check.

    Returns:
        True if n is prime, False otherwise.
    """
    if n < 2:
        return False
    if n == 2:
        return True
    if n == 3:
        return True
    if n % 2 == 0:
        return False
    if n % 3 == 0:
        return False

    i = 5
    while i * i <= n:
        if n % i == 0 or n % (i + 2) == 0:
            return False
        i += 6

    return True
