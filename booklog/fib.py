"""Naive recursive Fibonacci numbers."""


def fib(n: int) -> int:
    """Return the n-th Fibonacci number; values below 2 are returned unchanged."""
    if n < 2:
        return n
    return fib(n - 1) + fib(n - 2)