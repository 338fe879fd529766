"""
Command line interface for the DataContract SDK.
"""
