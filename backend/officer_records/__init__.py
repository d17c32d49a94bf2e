"""Officer Records — personnel administration backend with retirement and pension rules.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
