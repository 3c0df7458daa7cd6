"""Core prime generation utilities."""

from prime_spiral3d.core.sieve import (
    count_primes,
    generate_primes,
    is_prime,
    prime_density,
    prime_sieve_mask,
    sieve,
)

__all__ = [
    "sieve",
    "generate_primes",
    "is_prime",
    "prime_sieve_mask",
    "count_primes",
    "prime_density",
]
