"""Memory builtins over a simulated address space and software multiplication."""

__version__ = "0.1.0"
__all__ = ["memory", "intrinsics", "softmul"]