from types import MappingProxyType

from folio.schemas.series import SeriesCta, SeriesDefinition

SERIES_DATA = MappingProxyType(
    {
        "empathetic-remote-management": SeriesDefinition(
            slug="empathetic-remote-management",
            title="Empathetic Remote Management",
            summary=(
                "A four-part guide to leading distributed engineering teams with "
                "trust, tailored coaching, and sustainable pace."
            ),
            description=(
                "From high-impact 1:1s to people-first coaching styles, this series "
                "walks through the daily habits and guardrails that keep remote teams "
                "healthy, connected, and shipping. Each installment gives you practical "
                "rituals to strengthen psychological safety while protecting your own "
                "energy as a leader."
            ),
            cta=SeriesCta(label=None, href=None),
        ),
    }
)
