"""Allow running the plugin host as a module: python -m plugin_host."""

import sys

from plugin_host.runner import main

if __name__ == "__main__":
    sys.exit(main())
