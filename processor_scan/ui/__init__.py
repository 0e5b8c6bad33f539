"""
Streamlit presentation layer for Data Processor Scan.
"""
