"""
dpwh_pipeline.transforms — row-level stages: validate/clean, derive, impute, filter.
"""
