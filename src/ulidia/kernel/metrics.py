"""
Prometheus metrics collection for ulidia.

Counts identifiers produced and the failures that callers see, labelled by
the rule or collaborator that failed.
"""

from prometheus_client import Counter

# ============================================================================
# Generation Metrics
# ============================================================================

ids_generated_total = Counter(
    "ulidia_ids_generated_total",
    "Total number of identifiers generated",
    ["mode"],  # mode: clock, explicit
)

generation_failures_total = Counter(
    "ulidia_generation_failures_total",
    "Total number of failed generation attempts",
    ["reason"],  # reason: clock_out_of_range, entropy_unavailable, timestamp_overflow
)

# ============================================================================
# Codec Metrics
# ============================================================================

decode_failures_total = Counter(
    "ulidia_decode_failures_total",
    "Total number of rejected decode attempts",
    ["reason"],  # reason: invalid_length, invalid_character, timestamp_overflow
)

# ============================================================================
# Storage Metrics
# ============================================================================

records_written_total = Counter(
    "ulidia_records_written_total",
    "Total number of records written to an identifier store",
)
