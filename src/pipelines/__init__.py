"""Shared pipeline helpers for partitioning rows into groups."""

from .bucketing import BucketKey, BucketPlan, build_bucket_plan

__all__ = [
    "BucketKey",
    "BucketPlan",
    "build_bucket_plan",
]
