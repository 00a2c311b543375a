"""
A small CPU path tracer: spheres, three material models, a thin-lens camera
with motion blur, and a parallel row-by-row render driver.
"""

__version__ = "0.1.0"
