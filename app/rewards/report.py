"""Plain-text report of a refresh run, for operators to eyeball after the cron job."""

from app.rewards.models import RewardAudience, RewardSummary


def sorted_totals(totals: dict[str, int]) -> list[tuple[str, int]]:
    """Highest quantity first; ties broken by name so the output is stable."""
    return sorted(totals.items(), key=lambda entry: (-entry[1], entry[0]))


def render_summary_table(summary: RewardSummary) -> str:
    lines = [f"Rewards generated for {summary.gyms_updated} gyms (name: quantity)"]
    for audience in RewardAudience:
        rows = sorted_totals(summary.totals_for(audience))
        lines.append("")
        lines.append(f"{audience.value.capitalize()} rewards:")
        if not rows:
            lines.append("  (none)")
            continue
        width = max(len(name) for name, _ in rows)
        for name, quantity in rows:
            lines.append(f"  {name.ljust(width)}  {quantity:>6}")
    return "\n".join(lines)
