"""
The MODEL layer contains pure data structures: model identifiers, parameter
sets, the reaction kinetics and the preset library.
It has NO knowledge of the GUI (Qt) or of the field buffers.
"""
