"""Seed records for demo mode (no database configured).

Scores, breakdowns and SWOT bullets are computed by the heuristic engine
at seeding time so demo listings rank the same way real ones do.
"""

from __future__ import annotations

from .author import default_avatar
from .idea_evaluator import evaluate_idea
from .swot_generator import generate_swot

_DEMO_IDEAS: list[dict] = [
    {
        "id": "1",
        "title": "AI-Powered Learning Platform",
        "tagline": "Personalized education through machine learning algorithms",
        "category": "EdTech",
        "stage": "Prototype",
        "current_progress": "prototype",
        "entrepreneur": {"id": "ent1", "name": "Sarah Chen", "email": "sarah@example.com"},
        "description": (
            "Revolutionary AI platform that adapts to individual learning styles and provides "
            "personalized curriculum paths for students of all ages."
        ),
        "problem_statement": (
            "Students learn at different speeds, yet most classrooms deliver one fixed curriculum. "
            "Teachers cannot personalize lessons for thirty learners at once."
        ),
        "proposed_solution": (
            "An adaptive tutor that models each student's mastery and picks the next exercise. "
            "Teachers get a dashboard that flags who is stuck and why."
        ),
        "uniqueness": (
            "Our mastery model is trained on two million graded exercises and explains every "
            "recommendation to the teacher in plain language."
        ),
        "target_audience": "Individuals",
        "market_size": "Large (> $10B)",
        "competitors": "Khan Academy, Duolingo, Coursera",
        "customer_validation": "Pilot with 3 schools and 450 weekly active students",
        "business_model": "Subscription",
        "demo_url": "https://demo.learnpath.example.com",
        "views": 156,
        "featured": True,
        "created_at": "2024-01-15T09:00:00",
    },
    {
        "id": "2",
        "title": "Sustainable Food Delivery",
        "tagline": "Zero-waste food delivery using smart packaging",
        "category": "GreenTech",
        "stage": "Early Customers",
        "current_progress": "early-users",
        "entrepreneur": {"id": "ent2", "name": "Emma Wilson", "email": "emma@example.com"},
        "description": (
            "Innovative food delivery service that eliminates packaging waste through reusable "
            "smart containers and optimized logistics."
        ),
        "problem_statement": (
            "Food delivery generates billions of single-use containers every year. "
            "Restaurants want greener options but cannot run a return loop themselves."
        ),
        "proposed_solution": (
            "Reusable smart containers tracked by QR code, collected on the next delivery run. "
            "Washing and redistribution happen in shared regional hubs."
        ),
        "uniqueness": "Deposit-free returns built into the courier route, so customers never make an extra trip.",
        "target_audience": "SMBs",
        "market_size": "Medium ($1B - $10B)",
        "competitors": "DeliverZero, Loop",
        "customer_validation": "$50K MRR across 40 partner restaurants",
        "business_model": "Commission",
        "views": 243,
        "featured": False,
        "created_at": "2024-01-08T09:00:00",
    },
    {
        "id": "3",
        "title": "Virtual Reality Therapy",
        "tagline": "Mental health treatment through immersive VR experiences",
        "category": "HealthTech",
        "stage": "Growth",
        "current_progress": "revenue",
        "entrepreneur": {"id": "ent3", "name": "Dr. Michael Rodriguez", "email": "michael@example.com"},
        "description": (
            "Cutting-edge VR therapy platform helping patients overcome phobias, PTSD, and anxiety "
            "disorders through controlled virtual environments."
        ),
        "problem_statement": (
            "Exposure therapy works for phobias and PTSD, but recreating triggers safely in a clinic "
            "is slow and expensive. Waiting lists for therapists keep growing."
        ),
        "proposed_solution": (
            "A clinician-controlled VR library of graded exposure scenarios. "
            "Sessions are logged so progress can be reviewed between appointments."
        ),
        "uniqueness": "Scenarios are co-designed with licensed psychologists and validated in clinical studies.",
        "target_audience": "Enterprises",
        "market_size": "Large (> $10B)",
        "customer_validation": "$200K MRR from 25 clinics and 1,200 patients treated",
        "business_model": "Licensing",
        "demo_url": "https://vrtherapy.example.com/demo",
        "views": 367,
        "featured": True,
        "created_at": "2023-12-28T09:00:00",
    },
    {
        "id": "4",
        "title": "Micro-Lending for Freelancers",
        "tagline": "Short-term credit lines based on verified invoice history",
        "category": "FinTech",
        "stage": "Idea",
        "current_progress": "idea",
        "entrepreneur": {"id": "ent4", "name": "Priya Nair", "email": "priya@example.com"},
        "description": "Invoice-backed credit lines for independent professionals with irregular income.",
        "problem_statement": (
            "Freelancers wait 30 to 90 days for invoices to be paid. "
            "Banks reject them for credit because their income looks irregular."
        ),
        "proposed_solution": (
            "Connect invoicing tools, verify payment history, and offer a revolving credit line "
            "sized to outstanding invoices."
        ),
        "uniqueness": "Underwriting uses invoice payment behaviour of the client, not the freelancer's credit score.",
        "target_audience": "Individuals",
        "market_size": "Medium ($1B - $10B)",
        "competitors": "Fundbox, Payoneer Capital",
        "customer_validation": "",
        "business_model": "Marketplace",
        "views": 58,
        "featured": False,
        "created_at": "2024-02-02T09:00:00",
    },
]

_DEMO_NOTIFICATIONS: list[dict] = [
    {
        "id": "n1",
        "recipient_id": "ent1",
        "type": "interest",
        "title": "New investor interest in your idea",
        "message": "Alex Thompson expressed interest in your 'AI-Powered Learning Platform' idea",
        "idea_id": "1",
        "related_user_id": "inv1",
        "data": {"investor_name": "Alex Thompson", "investor_role": "Investor"},
        "action_required": True,
        "read": False,
        "created_at": "2024-01-16T10:30:00",
    },
    {
        "id": "n2",
        "recipient_id": "inv1",
        "type": "system",
        "title": "New ideas in EdTech",
        "message": "3 new ideas match your investment focus",
        "data": {},
        "action_required": False,
        "read": False,
        "created_at": "2024-01-16T08:00:00",
    },
]


def demo_idea_records() -> list[dict]:
    """Demo ideas, newest first, with engine outputs attached."""
    records = []
    for raw in sorted(_DEMO_IDEAS, key=lambda r: r["created_at"], reverse=True):
        record = dict(raw)
        author = dict(record["entrepreneur"])
        author.setdefault("avatar", default_avatar(author["email"]))
        record["entrepreneur"] = author
        evaluation = evaluate_idea(record)
        record.update(
            visibility="public",
            status="active",
            ai_score=evaluation.score,
            score_source="heuristic",
            ml_suggestions=list(evaluation.warnings),
            evaluation=evaluation.breakdown.model_dump(),
            swot=generate_swot(record).model_dump(),
            score_history=[{"score": evaluation.score, "date": record["created_at"], "reason": "Heuristic evaluation"}],
            interests=[],
        )
        records.append(record)
    return records


def demo_notification_records() -> list[dict]:
    return [dict(n) for n in _DEMO_NOTIFICATIONS]
