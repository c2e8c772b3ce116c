"""
FitTrack backend
"""
