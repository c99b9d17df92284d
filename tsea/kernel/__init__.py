"""
Kernel - persistence models, identity and session state.
"""
