"""Component tests for Fuseki.

This package contains detailed tests for the game record interpreter:
1. Liberty - Dead stone detection (core/liberty.py)
2. Game Record - SGF replay and normalization (core/game_record.py)
"""
