from app.schemas.timeline import TimelineEvent

TIMELINE_EVENTS = (
    TimelineEvent(
        id=1,
        time="1st Hour",
        title="Project Showcase",
        description="Witness the innovation as teams display their projects.",
        icon="fas fa-project-diagram",
        side="left",
        order=1,
    ),
    TimelineEvent(
        id=2,
        time="2nd Hour",
        title="Line Follower Race",
        description="High-speed precision robotics in action.",
        icon="fas fa-car-side",
        side="right",
        order=2,
    ),
    TimelineEvent(
        id=3,
        time="3rd Hour",
        title="Prompt Competition",
        description="The main event: Battle of the Prompt Engineers.",
        icon="fas fa-terminal",
        side="left",
        order=3,
    ),
    TimelineEvent(
        id=4,
        time="Final Hour",
        title="Judging & Awards",
        description="Celebrating the champions of ROBUSPHERE.",
        icon="fas fa-trophy",
        side="right",
        order=4,
    ),
)


class TimelineStore:
    def __init__(self, events: tuple[TimelineEvent, ...] = TIMELINE_EVENTS):
        self._events = tuple(events)

    def query(self, search: str | None = None, sort: str | None = "default") -> list[TimelineEvent]:
        """Filter by a case-insensitive substring of title or description, then sort.

        ``sort`` is ``"asc"`` or ``"desc"`` for title order; any other value
        falls back to the events' ``order`` field.
        """
        results = list(self._events)

        if search:
            needle = search.casefold()
            results = [
                event for event in results
                if needle in event.title.casefold() or needle in event.description.casefold()
            ]

        if sort == "asc":
            results.sort(key=lambda event: event.title.casefold())
        elif sort == "desc":
            results.sort(key=lambda event: event.title.casefold(), reverse=True)
        else:
            results.sort(key=lambda event: event.order)
        return results
