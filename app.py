"""Student Contacts Application Entry Point.

Simple redirect to the Streamlit app.

Run with: streamlit run app.py (requires the students backend running separately)
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from contacts.app import main

if __name__ == "__main__":
    main()
