import sys

from src.route_planner.cli import main

sys.exit(main())
