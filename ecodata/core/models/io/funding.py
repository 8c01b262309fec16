"""
Funding goal I/O models.

Funding goals are campaign data shown on the donate page; they are not stored
in the database.
"""

from __future__ import annotations

from typing import List

from .common import ApiModel


class FundingMilestone(ApiModel):
    value: int
    label: str
    description: str
    icon_name: str


class FundingGoal(ApiModel):
    id: str
    title: str
    description: str
    current_amount: int
    target_amount: int
    urgency: str
    days_remaining: int
    featured: bool
    location: str
    icon_name: str
    cover_image: str
    impact: str
    suggested_donations: List[int]
    milestones: List[FundingMilestone]
    theme: str
