"""
Current fundraising campaigns.

Campaign data changes rarely and is edited in code. Urgency is one of
``low``, ``medium``, ``high`` or ``critical``.
"""

from typing import List

from ecodata.core.models.io.funding import FundingGoal, FundingMilestone

_UNSPLASH = "https://images.unsplash.com"


def _milestones(*rows) -> List[FundingMilestone]:
    return [FundingMilestone(value=value, label=label, description=description, icon_name=icon) for value, label, description, icon in rows]


FUNDING_GOALS: List[FundingGoal] = [
    FundingGoal(
        id="reforestation",
        title="Reforestation Data Initiative",
        description="Help us fund data collection and analysis for reforestation projects",
        current_amount=3750,
        target_amount=10000,
        urgency="medium",
        days_remaining=42,
        featured=True,
        location="Amazon Basin",
        icon_name="TreePine",
        cover_image=f"{_UNSPLASH}/photo-1542601906990-b4d3fb778b09?q=80&w=1000",
        impact="Track 50,000 trees across 10 reforestation sites with advanced data collection",
        suggested_donations=[25, 50, 100, 250],
        milestones=_milestones(
            (2500, "Monitoring Systems", "Fund initial data collection sensors for forest monitoring", "Leaf"),
            (5000, "Halfway Mark", "Enable expanded data analysis and visualization tools", "Target"),
            (7500, "Research Phase", "Launch comprehensive environmental impact assessment studies", "Award"),
            (
                10000,
                "Full Funding",
                "Complete implementation of the entire data-driven reforestation monitoring system",
                "Trophy",
            ),
        ),
        theme="forest",
    ),
    FundingGoal(
        id="water-quality",
        title="Water Quality Monitoring Network",
        description="Support our initiative to build a network of water quality sensors across key waterways",
        current_amount=8200,
        target_amount=15000,
        urgency="high",
        days_remaining=21,
        featured=True,
        location="Thames River Basin",
        icon_name="Droplets",
        cover_image=f"{_UNSPLASH}/photo-1581022295087-35e593bcc689?q=80&w=1000",
        impact="Monitor water quality for 3 million residents with real-time data alerts",
        suggested_donations=[50, 150, 300, 750],
        milestones=_milestones(
            (3000, "Initial Sensors", "Deploy the first batch of water quality monitoring sensors", "Leaf"),
            (6000, "Data Platform", "Develop the data collection and analysis platform", "Target"),
            (9000, "Network Expansion", "Expand the sensor network to additional waterways", "Award"),
            (
                12000,
                "Community Engagement",
                "Launch community science program for participatory data collection",
                "Users",
            ),
            (15000, "Full Coverage", "Achieve full regional coverage and real-time monitoring capabilities", "Trophy"),
        ),
        theme="ocean",
    ),
    FundingGoal(
        id="community-impact",
        title="Community Impact Measurement",
        description="Fund our community-focused data collection and impact assessment projects",
        current_amount=4500,
        target_amount=8000,
        urgency="critical",
        days_remaining=14,
        featured=False,
        location="London Metropolitan Area",
        icon_name="Users",
        cover_image=f"{_UNSPLASH}/photo-1507608616759-54f48f0af0ee?q=80&w=1000",
        impact="Provide data-driven insights to 25 community organizations serving 100,000 people",
        suggested_donations=[20, 50, 100, 200],
        milestones=_milestones(
            (2000, "Research Tools", "Develop community impact assessment methodologies and tools", "Leaf"),
            (4000, "Data Collection", "Implement initial community data collection projects", "Target"),
            (6000, "Analysis Framework", "Build comprehensive analytics framework for social impact data", "Award"),
            (8000, "Full Implementation", "Complete the community impact measurement system and dashboards", "Trophy"),
        ),
        theme="sunset",
    ),
    FundingGoal(
        id="carbon-tracking",
        title="Carbon Impact Monitoring System",
        description="Help build our next-generation carbon impact monitoring and verification platform",
        current_amount=2200,
        target_amount=12000,
        urgency="medium",
        days_remaining=60,
        featured=True,
        location="Global Initiative",
        icon_name="Wind",
        cover_image=f"{_UNSPLASH}/photo-1523961131990-5ea7c61b2107?q=80&w=1000",
        impact="Enable precise carbon impact measurement across 500 environmental projects",
        suggested_donations=[100, 250, 500, 1000],
        milestones=_milestones(
            (3000, "Data Architecture", "Develop the core data architecture and collection methodology", "Database"),
            (6000, "Sensor Network", "Deploy initial sensor network and data collection systems", "Signal"),
            (9000, "Analytics Platform", "Build comprehensive analytics and visualization platform", "BarChart"),
            (
                12000,
                "Verification System",
                "Complete the carbon impact verification and certification system",
                "CheckCircle",
            ),
        ),
        theme="default",
    ),
]


def list_funding_goals() -> List[FundingGoal]:
    return list(FUNDING_GOALS)
