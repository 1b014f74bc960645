"""
Clinic bundle persistence: one versioned JSON document holding patients,
brushing events and message summaries.

Modules
-------
bundle  ClinicBundle model, load/parse/dump/save, BundleError.
"""
