"""The seven journalistic-integrity aspects, declared as data.

Every aspect is extracted by the same structured-output chain; only the
schema, the field holding the issue list and the log wording differ.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Type

from pydantic import BaseModel

from trustcheck.core.schemas import (
    ArticleAccountabilities,
    ArticleAttributions,
    ArticleClaims,
    ArticleConflicts,
    ArticleFairness,
    ArticleHarmMinimizations,
    ArticleOriginalReporting,
    Issue,
    ResultItem,
)


def normalize_issue(issue: Issue) -> ResultItem:
    return ResultItem(
        title=issue.title or "",
        source=issue.source or "",
        source_url=issue.source_url or "",
        description=issue.description or "",
    )


@dataclass(frozen=True)
class AspectSpec:
    key: str
    label: str
    name: str
    schema: Type[BaseModel]
    issues_field: str
    activity: str
    normalize: Callable[[Issue], ResultItem] = normalize_issue

    def issues_of(self, parsed: BaseModel) -> List[Issue]:
        return getattr(parsed, self.issues_field, None) or []


@dataclass
class AspectOutcome:
    """Result of one aspect extraction: either ``ok`` with data or ``degraded`` with an error."""

    spec: AspectSpec
    status: str
    issues: List[Issue] = field(default_factory=list)
    conclusion: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, spec: AspectSpec, parsed: BaseModel) -> "AspectOutcome":
        return cls(spec=spec, status="ok", issues=list(spec.issues_of(parsed)),
                   conclusion=getattr(parsed, "conclusion", None))

    @classmethod
    def degraded(cls, spec: AspectSpec, error: str) -> "AspectOutcome":
        return cls(spec=spec, status="degraded", error=error)

    @property
    def is_degraded(self) -> bool:
        return self.status == "degraded"


ASPECTS = (
    AspectSpec(
        key="TruthAndAccuracy",
        label="Truth and Accuracy",
        name="news-article-claims",
        schema=ArticleClaims,
        issues_field="claims",
        activity="Analyzing article claims",
    ),
    AspectSpec(
        key="Independence",
        label="Independence",
        name="news-article-conflicts",
        schema=ArticleConflicts,
        issues_field="conflicts",
        activity="Checking for conflicts of interest",
    ),
    AspectSpec(
        key="FairnessAndImpartiality",
        label="Fairness and Impartiality",
        name="news-article-fairness",
        schema=ArticleFairness,
        issues_field="fairness",
        activity="Checking for fairness and impartiality",
    ),
    AspectSpec(
        key="Accountability",
        label="Accountability",
        name="news-article-accountability",
        schema=ArticleAccountabilities,
        issues_field="accountabilities",
        activity="Checking for accountability",
    ),
    AspectSpec(
        key="HarmMinimization",
        label="Harm Minimization",
        name="news-article-harm-minimization",
        schema=ArticleHarmMinimizations,
        issues_field="harm_minimizations",
        activity="Checking for harm minimization",
    ),
    AspectSpec(
        key="Attribution",
        label="Attribution",
        name="news-article-attribution",
        schema=ArticleAttributions,
        issues_field="attributions",
        activity="Checking for attribution",
    ),
    AspectSpec(
        key="OriginalReporting",
        label="Original Reporting",
        name="news-article-original-reporting",
        schema=ArticleOriginalReporting,
        issues_field="original_reporting",
        activity="Checking for original reporting",
    ),
)
