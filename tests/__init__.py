"""
Right-of-way referee test suite

Test structure:
- unit/: Test components in isolation
- integration/: Walk the whole state machine through many phrases
"""
