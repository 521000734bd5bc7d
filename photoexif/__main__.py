# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Allow running photoexif as a module: python -m photoexif

Copyright 2025 DNAi inc.
"""

from photoexif.cli import run

if __name__ == "__main__":
    run()
