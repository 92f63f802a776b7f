import sys

from incidentxl.app import main

sys.exit(main())
