"""Permuted congruential generator (PCG32, XSH-RR variant).

The generator is bit-exact with the reference PCG32 algorithm by O'Neill,
so that a given (init_state, init_seq) pair always produces the same image.
Python integers are unbounded, so the 64-bit state is masked explicitly
after every update.

Each PCG instance is mutable and must not be shared between threads. The
image tracer gives every pixel its own generator, seeded from the pixel
coordinates, which keeps parallel renders reproducible.

Example:
    >>> from raytracer.core.pcg import PCG
    >>> pcg = PCG()
    >>> pcg.random_uint32()
    2707161783
"""

# =============================================================================
# Generator Constants
# =============================================================================

PCG_MULTIPLIER = 6364136223846793005

DEFAULT_INIT_STATE = 42
DEFAULT_INIT_SEQ = 54

MASK_64 = 0xFFFFFFFFFFFFFFFF
MASK_32 = 0xFFFFFFFF


class PCG:
    """PCG32 pseudo-random generator.

    Attributes:
        state: Current 64-bit internal state.
        inc: Stream increment (always odd).
    """

    __slots__ = ("state", "inc")

    def __init__(
        self, init_state: int = DEFAULT_INIT_STATE, init_seq: int = DEFAULT_INIT_SEQ
    ) -> None:
        """Seed the generator.

        Args:
            init_state: Initial state seed.
            init_seq: Stream selector. Different values give independent
                sequences for the same init_state.
        """
        self.state = 0
        self.inc = ((init_seq << 1) | 1) & MASK_64
        self.random_uint32()
        self.state = (self.state + init_state) & MASK_64
        self.random_uint32()

    def __repr__(self) -> str:
        return f"PCG(state={self.state}, inc={self.inc})"

    def random_uint32(self) -> int:
        """Advance the state and return a uniformly distributed 32-bit integer."""
        old_state = self.state
        self.state = (old_state * PCG_MULTIPLIER + self.inc) & MASK_64

        xorshifted = (((old_state >> 18) ^ old_state) >> 27) & MASK_32
        rot = old_state >> 59
        return ((xorshifted >> rot) | (xorshifted << ((-rot) & 31))) & MASK_32

    def random_float(self) -> float:
        """Return a uniform float in [0, 1]."""
        return self.random_uint32() / MASK_32

    def random_int(self, upper: int) -> int:
        """Return an integer in [0, upper).

        Raises:
            ValueError: If upper is not positive.
        """
        if upper <= 0:
            raise ValueError(f"upper must be positive, got {upper}")
        return self.random_uint32() % upper
