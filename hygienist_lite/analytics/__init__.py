"""
Brushing adherence analytics.

Modules
-------
metrics   MetricsSummary, summarize(), consecutive_days(), achievement_rate_7d().
daily     Per-day series over a calendar spine (duration, morning/night flags).
roster    Patient overviews, activity flags, filtering and sorting.
"""
