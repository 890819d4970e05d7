"""Deterministic consensus primitives (zero I/O).

  stats          : median / mean / sample std-dev
  gates          : majority gate verdicts, recomputed automatic failure
  rubric         : per-criterion median, category and weighted scores
  bonus          : component-wise max bonus tracks
  recommendation : median ordinal recommendation
"""
