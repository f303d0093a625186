"""
Run Clear Cell simulations from a source checkout.

Same as the installed ``clearcell-simulate`` command.
"""
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from clearcell.simulation import main


if __name__ == "__main__":
    main()
