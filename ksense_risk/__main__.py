import sys

from ksense_risk.main import main

if __name__ == "__main__":
    sys.exit(main())
