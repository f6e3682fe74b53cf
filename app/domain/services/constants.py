# Constants for the recommendation pipeline.
DEFAULT_LIMIT = 4  # Recommendations shown on a product page
SIMILARITY_OVERFETCH = 2  # Edges requested per slot, leaves room for history filtering

# Fallback rule weights (fixed, not learned)
WEIGHT_SAME_COMPRESSION_OTHER_TYPE = 0.85  # rule A
WEIGHT_SHARED_CATEGORY_OTHER_COMPRESSION = 0.70  # rule B
WEIGHT_SAME_TYPE_OTHER_COMPRESSION = 0.60  # rule C

# Telemetry
FEATURE_RECOMMENDATIONS = "recommendations"
OPERATION_KNN_QUERY = "knn_query"  # served from the precomputed similarity table
OPERATION_RULE_FALLBACK = "rule_fallback"  # served by the rule-based scorer
