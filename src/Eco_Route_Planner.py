import sys
import os

# Add the current directory to sys.path so we can import the package
# if this script is run from the src directory without installing it.
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from eco_route.main import main

if __name__ == "__main__":
    main()
