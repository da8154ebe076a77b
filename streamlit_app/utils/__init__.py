"""
Utility modules for the Streamlit frontend.

This package contains:
- session: Per-session QueryOrchestrator and pagination throttle
"""
