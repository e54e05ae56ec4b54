#!/usr/bin/env python3
"""
Main entry point for the defect-rate simulator.
Run with: streamlit run main.py
"""

from ui.main import main

if __name__ == "__main__":
    main()
