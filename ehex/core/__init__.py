"""ehex.core — Foundation layer.

Contains the pixel grid, palette, EHEX codecs, image model and report builder.
This module has NO dependencies on ehex.commands or ehex.registry.
Only stdlib, numpy, and PIL are allowed here.
"""
