"""Deviation chart assembly and serialization helpers.

The chart is described by a declarative `DrawList` rather than drawn here.
This package contains the style table, the draw-list types, the assembler, and
the JSON codec used by the chart endpoint.
"""
