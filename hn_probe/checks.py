"""
Checks run against the live Hacker News API.

Each check is a plain function taking the API client and the suite settings.
It returns the values it observed, raises CheckFailed on the first unmet
expectation, or raises ConditionNotObserved when the sample it scanned held
nothing to assert on.
"""

import time
from typing import Any, Callable, Dict, List, NamedTuple, Optional

from pydantic import BaseModel

from hn_probe.hn import HackerNewsAPI
from hn_probe.models import Story
from hn_probe.scan import find_first, has_kids, has_no_kids, has_no_url, is_dead

CORE = "core"
EDGE = "edge"
GROUPS = (CORE, EDGE)

Observed = Dict[str, Any]

# Items that can hold comments
PARENT_TYPES = ("story", "comment", "poll")


class SuiteSettings(BaseModel):
    """Thresholds and sample sizes used by the checks."""

    min_top_stories: int = 100
    max_top_stories: int = 500
    sample_size: int = 10
    score_sample_size: int = 20
    score_ceiling: int = 10000
    min_max_item_id: int = 1_000_000
    max_story_age_seconds: int = 365 * 24 * 60 * 60
    missing_item_id: int = 999999999999


class CheckFailed(AssertionError):
    """An expectation did not hold."""

    def __init__(self, message: str, observed: Optional[Observed] = None):
        super().__init__(message)
        self.message = message
        self.observed = observed or {}


class ConditionNotObserved(Exception):
    """The scanned sample held nothing for the check to assert on."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


CheckFunc = Callable[[HackerNewsAPI, SuiteSettings], Observed]


class Check(NamedTuple):
    group: str
    name: str
    func: CheckFunc

    def __call__(self, api: HackerNewsAPI, settings: SuiteSettings) -> Observed:
        return self.func(api, settings)


REGISTRY: List[Check] = []


def check(group: str, name: str) -> Callable[[CheckFunc], CheckFunc]:
    """Register a check function under a group, keeping definition order."""
    if group not in GROUPS:
        raise ValueError(f"unknown check group {group!r}")

    def decorator(func: CheckFunc) -> CheckFunc:
        REGISTRY.append(Check(group, name, func))
        return func

    return decorator


def checks_for(group: str) -> List[Check]:
    if group not in GROUPS:
        raise ValueError(f"unknown check group {group!r}, expected one of {GROUPS}")
    return [c for c in REGISTRY if c.group == group]


def expect(condition: bool, message: str, **observed: Any) -> None:
    """Raise CheckFailed with a descriptive message unless condition holds."""
    if not condition:
        details = ", ".join(f"{k}={v!r}" for k, v in observed.items())
        raise CheckFailed(f"{message} ({details})" if details else message, observed)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _first_story(api: HackerNewsAPI) -> Story:
    ids = api.list_top()
    expect(len(ids) > 0, "Top stories list should not be empty")
    story = api.get_story(ids[0])
    expect(story is not None, "Top story should not be absent", id=ids[0])
    return story


# Core retrieval


@check(CORE, "top stories list")
def top_stories_list(api: HackerNewsAPI, settings: SuiteSettings) -> Observed:
    ids = api.list_top()
    size = len(ids)
    expect(
        size >= settings.min_top_stories,
        f"Top stories should contain at least {settings.min_top_stories} items",
        size=size,
    )
    expect(
        size <= settings.max_top_stories,
        f"Top stories should contain at most {settings.max_top_stories} items",
        size=size,
    )
    non_positive = [i for i in ids if i <= 0]
    expect(not non_positive, "All story IDs should be positive numbers", non_positive=non_positive)
    expect(len(set(ids)) == size, "Story IDs should be unique", size=size, distinct=len(set(ids)))
    return {"size": size}


@check(CORE, "top story details")
def top_story_details(api: HackerNewsAPI, settings: SuiteSettings) -> Observed:
    ids = api.list_top()
    expect(len(ids) > 0, "Top stories list should not be empty")
    story_id = ids[0]
    story = api.get_story(story_id)

    expect(story is not None, "Top story should not be absent", id=story_id)
    expect(story.id == story_id, "Story ID should match the requested ID", requested=story_id, got=story.id)
    expect(story.type == "story", "Top story type should be 'story'", type=story.type)
    expect(not _is_blank(story.title), "Story title should not be blank", title=story.title)
    expect(not _is_blank(story.by), "Story author should not be blank", by=story.by)
    expect(story.time is not None and story.time > 0, "Story time should be positive", time=story.time)
    expect(story.score is not None, "Story score should be present")
    expect(story.score >= 0, "Story score should be non-negative", score=story.score)
    return {"id": story.id, "title": story.title, "by": story.by, "score": story.score}


def _first_comment(api: HackerNewsAPI):
    ids = api.list_top()
    story = find_first(ids, has_kids, api.get_story)
    expect(story is not None, "Should find a story with comments", scanned=len(ids))
    comment_id = story.kids[0]
    comment = api.get_comment(comment_id)
    expect(comment is not None, "First comment should not be absent", id=comment_id)
    return story, comment


@check(CORE, "first comment of top story")
def first_comment(api: HackerNewsAPI, settings: SuiteSettings) -> Observed:
    story, comment = _first_comment(api)
    comment_id = story.kids[0]

    expect(comment.id == comment_id, "Comment ID should match the requested ID", requested=comment_id, got=comment.id)
    expect(comment.type == "comment", "Comment type should be 'comment'", type=comment.type)
    expect(comment.parent == story.id, "Comment parent should be the story ID", parent=comment.parent, story=story.id)
    expect(comment.by is not None, "Comment author should not be null")
    expect(comment.time is not None and comment.time > 0, "Comment time should be positive", time=comment.time)
    return {"story": story.id, "comment": comment.id, "by": comment.by}


@check(CORE, "top stories ordering")
def top_stories_ordering(api: HackerNewsAPI, settings: SuiteSettings) -> Observed:
    # The ranking also weighs age, so only a non-strict comparison is meaningful.
    ids = api.list_top()
    expect(len(ids) >= 2, "Need at least two top stories to compare", size=len(ids))
    first = api.get_story(ids[0])
    second = api.get_story(ids[1])
    expect(first is not None and second is not None, "Both leading stories should be present", ids=ids[:2])
    expect(
        first.score is not None and second.score is not None,
        "Both leading stories should have a score",
        first=first.score,
        second=second.score,
    )
    expect(
        first.score >= second.score,
        "First story should have higher or equal score than second story",
        first=first.score,
        second=second.score,
    )
    return {"first": first.score, "second": second.score}


@check(CORE, "leading top stories are stories")
def leading_top_stories(api: HackerNewsAPI, settings: SuiteSettings) -> Observed:
    ids = api.list_top()
    count = min(settings.sample_size, len(ids))
    for position, story_id in enumerate(ids[:count]):
        story = api.get_story(story_id)
        expect(story is not None, f"Story at position {position} should not be absent", id=story_id)
        expect(story.type == "story", f"Item at position {position} should be a story", id=story_id, type=story.type)
    return {"checked": count}


@check(CORE, "comment parent resolves")
def comment_parent_resolves(api: HackerNewsAPI, settings: SuiteSettings) -> Observed:
    _, comment = _first_comment(api)
    expect(comment.parent is not None, "Comment should reference a parent", id=comment.id)
    parent = api.get_item(comment.parent)
    if parent is None:
        raise ConditionNotObserved(f"parent {comment.parent} of comment {comment.id} no longer resolves")
    parent_type = parent.get("type") if isinstance(parent, dict) else None
    expect(
        parent_type in PARENT_TYPES,
        f"Comment parent should be one of {', '.join(PARENT_TYPES)}",
        parent=comment.parent,
        type=parent_type,
    )
    return {"comment": comment.id, "parent": comment.parent, "type": parent_type}


# Edge cases


@check(EDGE, "non-existent item")
def non_existent_item(api: HackerNewsAPI, settings: SuiteSettings) -> Observed:
    item_id = settings.missing_item_id
    response = api.get_item_response(item_id)
    expect(response.status_code == 200, "Response should be 200 even for a non-existent ID", status=response.status_code)
    expect(response.text.strip() == "null", "Response body should be 'null' for a non-existent ID", body=response.text[:100])
    expect(api.get_story(item_id) is None, "Non-existent ID should decode as absent", id=item_id)
    return {"id": item_id, "status": response.status_code}


@check(EDGE, "zero item id")
def zero_item_id(api: HackerNewsAPI, settings: SuiteSettings) -> Observed:
    response = api.get_item_response(0)
    expect(response.status_code == 200, "Response should be 200 for zero ID", status=response.status_code)
    return {"status": response.status_code}


@check(EDGE, "dead story")
def dead_story(api: HackerNewsAPI, settings: SuiteSettings) -> Observed:
    story = find_first(api.list_top(), is_dead, api.get_story)
    if story is None:
        raise ConditionNotObserved("No dead stories found in current top stories")
    expect(story.dead is True, "Dead story should have dead flag set to true", dead=story.dead)
    return {"id": story.id}


@check(EDGE, "story without comments")
def story_without_comments(api: HackerNewsAPI, settings: SuiteSettings) -> Observed:
    story = find_first(api.list_top(), has_no_kids, api.get_story)
    if story is None:
        raise ConditionNotObserved("All top stories have comments")
    expect(not story.kids, "Story without comments should have null or empty kids", kids=story.kids)
    return {"id": story.id}


@check(EDGE, "story without url")
def story_without_url(api: HackerNewsAPI, settings: SuiteSettings) -> Observed:
    story = find_first(api.list_top(), has_no_url, api.get_story)
    if story is None:
        raise ConditionNotObserved("All top stories have URLs")
    expect(not story.url, "Story without URL should have null or empty URL", url=story.url)
    expect(story.text is not None, "Story without URL should have text content", id=story.id)
    return {"id": story.id, "title": story.title}


@check(EDGE, "max item id")
def max_item_id(api: HackerNewsAPI, settings: SuiteSettings) -> Observed:
    max_id = api.max_item_id()
    expect(max_id > 0, "Max item ID should be positive", max_id=max_id)
    expect(
        max_id > settings.min_max_item_id,
        f"Max item ID should be greater than {settings.min_max_item_id}",
        max_id=max_id,
    )
    return {"max_id": max_id}


@check(EDGE, "story lists differ")
def story_lists_differ(api: HackerNewsAPI, settings: SuiteSettings) -> Observed:
    top = api.list_top()
    new = api.list_new()
    best = api.list_best()
    expect(top != new, "Top stories should be different from new stories")
    expect(top != best, "Top stories should be different from best stories")
    expect(new != best, "New stories should be different from best stories")
    return {"top": len(top), "new": len(new), "best": len(best)}


@check(EDGE, "story timestamp")
def story_timestamp(api: HackerNewsAPI, settings: SuiteSettings) -> Observed:
    story = _first_story(api)
    now = int(time.time())
    oldest = now - settings.max_story_age_seconds
    expect(story.time is not None, "Story timestamp should be present", id=story.id)
    expect(story.time <= now, "Story timestamp should not be in the future", time=story.time, now=now)
    expect(story.time > oldest, "Story timestamp should be within the last year", time=story.time, oldest=oldest)
    return {"time": story.time}


@check(EDGE, "story score range")
def story_score_range(api: HackerNewsAPI, settings: SuiteSettings) -> Observed:
    ids = api.list_top()
    count = min(settings.score_sample_size, len(ids))
    for story_id in ids[:count]:
        story = api.get_story(story_id)
        expect(story is not None, "Story should not be absent", id=story_id)
        expect(story.score is not None, "Story score should be present", id=story_id)
        expect(story.score >= 0, "Story score should be non-negative", id=story_id, score=story.score)
        expect(
            story.score < settings.score_ceiling,
            f"Story score should be less than {settings.score_ceiling}",
            id=story_id,
            score=story.score,
        )
    return {"checked": count}


@check(EDGE, "descendants count")
def descendants_count(api: HackerNewsAPI, settings: SuiteSettings) -> Observed:
    story = find_first(api.list_top(), has_kids, api.get_story)
    if story is None or story.descendants is None:
        raise ConditionNotObserved("No suitable story found for descendants validation")
    expect(
        story.descendants >= len(story.kids),
        "Descendants count should be greater than or equal to direct kids count",
        descendants=story.descendants,
        kids=len(story.kids),
    )
    return {"id": story.id, "descendants": story.descendants, "kids": len(story.kids)}
