"""
Gerichtsvorlagen: vorkonfigurierte Feiertagszuordnungen einer Gerichtsbarkeit.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .holidays import DEFAULT_SUMMER_VACATION_CONFIG, DEFAULT_WINTER_BREAK_SPLIT
from .models import AssignmentType, HolidayState, HolidayUserConfig, Parent, PatternId

A = Parent.PARENT_A
B = Parent.PARENT_B


@dataclass
class TemplateHoliday:
    holiday_id: str
    assignment: AssignmentType
    odd_year_parent: Optional[Parent] = None
    exchange_time: str = '18:00'
    timing_description: str = ''
    enabled: bool = True


@dataclass
class CourtTemplate:
    id: str
    name: str
    jurisdiction: str
    version: str
    description: str
    default_pattern: PatternId
    default_exchange_time: str
    holidays: List[TemplateHoliday] = field(default_factory=list)
    notes: str = ''

    def holiday_state(self) -> HolidayState:
        """Feiertagskonfiguration, wie sie die Vorlage vorgibt."""
        configs = [
            HolidayUserConfig(h.holiday_id, h.enabled, h.assignment, odd_year_parent=h.odd_year_parent)
            for h in self.holidays
        ]
        return HolidayState(
            holiday_configs=configs,
            winter_break_split=DEFAULT_WINTER_BREAK_SPLIT,
            summer_vacation_config=DEFAULT_SUMMER_VACATION_CONFIG,
            selected_preset=self.id,
        )


ALTERNATE = AssignmentType.ALTERNATE_ODD_EVEN
WEEKEND_TIMING = 'Friday 6:00 PM through Monday 6:00 PM'

NEVADA_8TH_DISTRICT_TEMPLATE = CourtTemplate(
    id='nevada-8th-district-standard',
    name='Nevada 8th District Court - Standard',
    jurisdiction='Nevada 8th District Court (Clark County)',
    version='1.0.0',
    description=('Standard holiday and vacation schedule used by the Nevada 8th District Court '
                 '(Clark County, including Las Vegas). Includes alternating holidays, summer '
                 'vacation selection, and winter break split.'),
    default_pattern=PatternId.EVERY_OTHER_WEEKEND,
    default_exchange_time='18:00',
    holidays=[
        # Ohne Katalogeintrag: new-years-day, easter (werden bei der Auflösung übersprungen)
        TemplateHoliday('new-years-day', ALTERNATE, B,
                        timing_description='6:00 PM December 31 through 6:00 PM January 1'),
        TemplateHoliday('presidents-day', ALTERNATE, A, timing_description=WEEKEND_TIMING),
        TemplateHoliday('spring-break', ALTERNATE, B,
                        timing_description='As determined by school calendar'),
        TemplateHoliday('easter', ALTERNATE, A,
                        timing_description='Friday 6:00 PM through Sunday 6:00 PM'),
        TemplateHoliday('memorial-day', ALTERNATE, B, timing_description=WEEKEND_TIMING),
        TemplateHoliday('independence-day', ALTERNATE, A,
                        timing_description='6:00 PM July 3 through 6:00 PM July 5'),
        TemplateHoliday('labor-day', ALTERNATE, B, timing_description=WEEKEND_TIMING),
        TemplateHoliday('nevada-day', ALTERNATE, A, timing_description=WEEKEND_TIMING),
        TemplateHoliday('thanksgiving', ALTERNATE, B,
                        timing_description='Wednesday 6:00 PM through Sunday 6:00 PM'),
        TemplateHoliday('winter-break', AssignmentType.SPLIT_PERIOD,
                        timing_description='First half / Second half alternates by year'),
        TemplateHoliday('mlk-day', ALTERNATE, A, timing_description=WEEKEND_TIMING),
        TemplateHoliday('veterans-day', ALTERNATE, B,
                        timing_description=WEEKEND_TIMING + ' (if 3-day weekend)'),
        TemplateHoliday('mothers-day', AssignmentType.ALWAYS_PARENT_B,
                        timing_description='Saturday 9:00 AM through Sunday 6:00 PM'),
        TemplateHoliday('fathers-day', AssignmentType.ALWAYS_PARENT_A,
                        timing_description='Saturday 9:00 AM through Sunday 6:00 PM'),
        TemplateHoliday('halloween', ALTERNATE, A,
                        timing_description='6:00 PM October 31 through 9:00 PM October 31'),
    ],
    notes=('Exchange times are 6:00 PM unless otherwise specified. The delivering parent is '
           'responsible for transportation. Holiday periods take precedence over regular '
           'custody schedules.'),
)

TEMPLATE_REGISTRY: Dict[str, CourtTemplate] = {
    NEVADA_8TH_DISTRICT_TEMPLATE.id: NEVADA_8TH_DISTRICT_TEMPLATE,
}


def get_template(template_id: str) -> Optional[CourtTemplate]:
    return TEMPLATE_REGISTRY.get(template_id)


def templates_by_jurisdiction(jurisdiction: str) -> List[CourtTemplate]:
    term = jurisdiction.lower()
    return [t for t in TEMPLATE_REGISTRY.values() if term in t.jurisdiction.lower()]
