"""Statistics Aggregator

Folds raw project and user rows into the admin dashboard snapshot in a
single pass. Pure computation; loading rows is the caller's job.
"""
from collections import defaultdict
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Tuple
from src.domain.enums import ApprovalStatus, ProjectStatus, UserRole

UNCATEGORIZED = "Uncategorized"


def _value(item) -> Optional[str]:
    return item.value if hasattr(item, "value") else item


def _dec(value) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal("0")


class StatisticsAggregator:
    """Builds the admin statistics snapshot"""

    def __init__(self, category_limit: int = 10):
        self.category_limit = category_limit

    def project_summary(self, rows: Iterable[tuple]) -> Dict[str, Any]:
        """
        Aggregate project rows.

        Args:
            rows: (status, industry, funding_goal, current_funding,
                   funding_from_other_sources) tuples

        Returns:
            Dict with project_counts, funding_stats and category_breakdown
        """
        counts: Dict[str, int] = {status.value: 0 for status in ProjectStatus}
        total = 0

        funded_projects = 0
        goal_sum = Decimal("0")
        current_sum = Decimal("0")
        progress_sum = Decimal("0")

        categories: Dict[str, Dict[str, Any]] = defaultdict(
            lambda: {"count": 0, "total_funding": Decimal("0")}
        )

        for status, industry, goal, current, other in rows:
            status = _value(status)
            total += 1
            counts[status] = counts.get(status, 0) + 1

            if status != ProjectStatus.approved.value:
                continue

            raised = _dec(current) + _dec(other)
            bucket = categories[industry or UNCATEGORIZED]
            bucket["count"] += 1
            bucket["total_funding"] += raised

            goal = _dec(goal)
            if goal > 0:
                funded_projects += 1
                goal_sum += goal
                current_sum += raised
                progress_sum += raised / goal * 100

        avg_progress = (
            round(float(progress_sum / funded_projects), 1) if funded_projects else 0.0
        )

        breakdown = sorted(
            (
                {
                    "category": name,
                    "count": data["count"],
                    "total_funding": float(data["total_funding"]),
                }
                for name, data in categories.items()
            ),
            key=lambda item: (-item["count"], item["category"]),
        )[: self.category_limit]

        return {
            "project_counts": {"total": total, **counts},
            "funding_stats": {
                "total_projects": funded_projects,
                "total_funding_goal": float(goal_sum),
                "total_current_funding": float(current_sum),
                "avg_progress": avg_progress,
            },
            "category_breakdown": breakdown,
        }

    def user_summary(self, groups: Iterable[Tuple[Any, Any, int]]) -> Dict[str, int]:
        """Fold (role, approval_status, count) groups; ``total`` leaves out admins"""
        summary = {
            "total": 0,
            "project_owners": 0,
            "investors": 0,
            "admins": 0,
            ApprovalStatus.pending.value: 0,
            ApprovalStatus.approved.value: 0,
            ApprovalStatus.rejected.value: 0,
        }
        for role, approval_status, count in groups:
            role = _value(role)
            if role == UserRole.admin.value:
                summary["admins"] += count
                continue
            summary["total"] += count
            if role == UserRole.project_owner.value:
                summary["project_owners"] += count
            elif role == UserRole.investor.value:
                summary["investors"] += count
            status = _value(approval_status)
            if status in summary:
                summary[status] += count
        return summary

    def recent_activity(self, recent: Iterable[tuple]) -> List[Dict[str, Any]]:
        """Summaries of the newest (project, owner) pairs"""
        return [
            {
                "id": project.id,
                "title": project.title,
                "status": _value(project.status),
                "owner_name": owner.full_name if owner else None,
                "created_at": project.created_at,
                "updated_at": project.updated_at,
            }
            for project, owner in recent
        ]

    def build_snapshot(
        self,
        project_rows: Iterable[tuple],
        user_groups: Iterable[Tuple[Any, Any, int]],
        recent: Iterable[tuple],
    ) -> Dict[str, Any]:
        snapshot = self.project_summary(project_rows)
        snapshot["user_counts"] = self.user_summary(user_groups)
        snapshot["recent_activity"] = self.recent_activity(recent)
        snapshot["generated_at"] = datetime.utcnow()
        return snapshot
