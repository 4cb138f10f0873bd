"""
procsnap - Point-in-time hardware and OS snapshots for Linux.

Reads the kernel pseudo-filesystems (/proc and /sys) and the PCI/USB
vendor databases, and assembles everything into one immutable snapshot.
"""

__version__ = "0.3.0"
__author__ = "procsnap developers"

__all__ = ["__version__"]
