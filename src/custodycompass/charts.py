# src/custodycompass/charts.py

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from .models import Parent, YearlyStats

PARENT_COLORS = {Parent.PARENT_A: "#3b82f6", Parent.PARENT_B: "#f97316"}


def _placeholder(filename: str, title: str = None):
    fig, ax = plt.subplots()
    ax.text(0.5, 0.5, "No data", ha="center", va="center", fontsize=14)
    ax.axis("off")
    if title:
        ax.set_title(title)
    fig.savefig(filename, bbox_inches="tight")
    plt.close(fig)


def create_timeshare_chart(stats: YearlyStats, filename: str, labels: list[str] = None,
                           return_handles: bool = False):
    """
    Ringdiagramm der Jahresanteile beider Elternteile als PNG.
    :param stats: Ergebnis von calculate_yearly_stats.
    :param filename: Pfad zur Ausgabedatei, z.B. "timeshare_2025.png".
    :param labels: (Optional) Anzeigenamen für Parent A / Parent B.
    :param return_handles: Wenn True, gibt (wedges, texts, autotexts) zurück.
    """
    title = f"Timeshare {stats.year}"
    values = [stats.parent_a.days, stats.parent_b.days]
    if sum(values) == 0:
        _placeholder(filename, title)
        if return_handles:
            return [], [], []
        return

    labels = labels or [Parent.PARENT_A.label, Parent.PARENT_B.label]
    fig, ax = plt.subplots()
    wedges, texts, autotexts = ax.pie(
        values, labels=labels, autopct="%1.1f%%",
        colors=[PARENT_COLORS[Parent.PARENT_A], PARENT_COLORS[Parent.PARENT_B]],
        wedgeprops={"width": 0.4},
    )
    ax.axis("equal")
    ax.set_title(title)
    fig.savefig(filename, bbox_inches="tight")
    plt.close(fig)
    if return_handles:
        return wedges, texts, autotexts


def create_monthly_chart(stats: YearlyStats, filename: str, labels: list[str] = None):
    """Gestapelte Balken: Tage je Monat und Elternteil."""
    title = f"Days per month {stats.year}"
    if stats.total_days == 0:
        _placeholder(filename, title)
        return

    labels = labels or [Parent.PARENT_A.label, Parent.PARENT_B.label]
    months = [m.month[:3] for m in stats.monthly_breakdown]
    a_days = [m.parent_a_days for m in stats.monthly_breakdown]
    b_days = [m.parent_b_days for m in stats.monthly_breakdown]

    fig, ax = plt.subplots(figsize=(10, 4))
    ax.bar(months, a_days, label=labels[0], color=PARENT_COLORS[Parent.PARENT_A])
    ax.bar(months, b_days, bottom=a_days, label=labels[1], color=PARENT_COLORS[Parent.PARENT_B])
    ax.set_ylabel("Days")
    ax.set_title(title)
    ax.legend()
    fig.savefig(filename, bbox_inches="tight")
    plt.close(fig)
