import sys

from raycaster.game import main

if __name__ == "__main__":
    main()
    sys.exit()
