"""Entry point for running linewise as a module.

This allows running: python -m linewise
"""

from .cli import main

if __name__ == "__main__":
    # No try/except here: main() is the CLI boundary and already catches all
    # exceptions, logs them, and exits with the appropriate code.
    main()
