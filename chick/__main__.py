"""
chick - Extended DNS Check

Entry point for running as a module:
    python -m chick <domain/ip>
"""

from .cli import main

if __name__ == '__main__':
    main()
