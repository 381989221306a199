# src/time_tracking_cli/__main__.py

import sys

from time_tracking_cli.cli.main import main

sys.exit(main())
