"""
The MODEL layer contains pure data structures and business logic.
It has NO knowledge of the GUI (Qt) or the event routing (controller).
It deals with Geometry, Coordinate Systems, and I/O.
"""
