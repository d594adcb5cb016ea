import os
import sys


# Put the repository's src/ on sys.path so tests import `chessrules` without an install
SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, "src"))
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)
