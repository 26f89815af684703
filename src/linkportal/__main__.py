"""Entry point for 'python -m linkportal' command.

This module allows the LinkPortal CLI to be invoked using
'python -m linkportal'.
"""

from linkportal.cli import main

if __name__ == "__main__":
    main()
