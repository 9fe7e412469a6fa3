"""tilekit — seamless tile pattern placement.

  config    Shared placement constants (PLACEMENT_RULES).
  geometry  Collision shapes, convex decomposition and SAT tests.
  placer    Organic and grid placement engines.
"""
