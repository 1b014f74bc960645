"""
Terminal reporting for CLI commands.

Modules
-------
formatters  ASCII formatters for metrics, recommendations, questionnaires and
            the patient roster. All rounding for display happens here.
"""
