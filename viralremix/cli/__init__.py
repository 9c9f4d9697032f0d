"""
Command-line interface for ViralRemix
"""
