"""Small studies in thread coordination: PID loops, scheduling, buffers, ordering and fusion."""

__version__ = "0.1.0"