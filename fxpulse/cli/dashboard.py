"""CLI dashboard — prints the analysis panel to the console."""

from fxpulse.analysis.models import AnalysisSnapshot


def print_snapshot(snapshot: AnalysisSnapshot) -> str:
    """Format and print an analysis snapshot.

    Args:
        snapshot: The engine's current snapshot.

    Returns:
        The formatted string (also printed to stdout).
    """
    bias = snapshot.bias
    bias_str = (
        f"{bias.signal} ({bias.bullish_pct:.0f}% bullish)" if bias is not None else "N/A"
    )

    lines = [
        "──────────────── FxPulse Analysis ────────────────",
        f"  Timeframe:       {snapshot.timeframe.label}",
        f"  Reference:       {snapshot.reference_price:.4f}",
        f"  Bias:            {bias_str}",
        "  Indicators:",
    ]
    if not snapshot.indicators:
        lines.append("    N/A")
    for r in snapshot.indicators:
        lines.append(f"    {r.name:<6} {r.value:>8.2f}  {r.label.capitalize()}")

    lines.append("  Price zones:")
    for z in snapshot.zones:
        note = f"  {z.note}" if z.note else ""
        lines.append(
            f"    {z.kind.capitalize():<10} {z.price:.4f}  {z.strength.capitalize():<6}{note}"
        )

    lines.append("  Trade setups:")
    for s in (snapshot.setups.long, snapshot.setups.short):
        lines.append(
            f"    {s.direction.upper():<5} entry {s.entry_display}  "
            f"TP {s.take_profit_display}  R:R {s.risk_reward}"
        )
        lines.append(f"          {s.note}")

    lines.append("──────────────────────────────────────────────────")
    output = "\n".join(lines)
    print(output)
    return output
