""" The Room Beyond: narrative core

Focus selection, dialog graphs and story progression for a single room
exploration game. Rendering, audio and input live elsewhere.
"""
