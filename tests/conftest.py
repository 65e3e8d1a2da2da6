import os
import sys

# Make the example driver at the repository root importable
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
