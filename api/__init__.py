"""
FastAPI backend dla Cavern Combat Simulator.
"""
