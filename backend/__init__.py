"""
CoFound Central Asia Backend API.
"""
