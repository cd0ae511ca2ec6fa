"""Standalone NiceGUI application for the event classifier."""
