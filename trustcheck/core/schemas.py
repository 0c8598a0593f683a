"""Pydantic models shared by the extractors, the aggregator and the API.

Two families live here:

* LLM output schemas (``NewsArticle``, the issue models, the seven aspect
  containers and ``TrustResult``). These are handed to
  ``with_structured_output`` and describe what the model must return.
* Response models (``ResultItem``, ``AnalysisResult``, ``RequestState`` ...)
  which use the capitalised wire names the web client renders.
"""

from typing import Dict, List, Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field


ASPECT_KEYS = (
    "TruthAndAccuracy",
    "Independence",
    "FairnessAndImpartiality",
    "Accountability",
    "HarmMinimization",
    "Attribution",
    "OriginalReporting",
)

TrustLevel = Literal["High", "Medium", "Low", "Unknown"]
TRUST_LEVELS = get_args(TrustLevel)


# --- LLM output schemas ---

class NewsArticle(BaseModel):
    title: str = Field(description="The title of the news article")
    url: str = Field(description="The URL of the news article")
    body: Optional[str] = Field(None, description="The body of the news article")
    author: Optional[str] = Field(None, description="The author of the news article")
    date: Optional[str] = Field(None, description="The date the news article was published")


class Issue(BaseModel):
    """A single flagged instance within one aspect."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(description="The title of the issue")
    source: str = Field(description="Name of the source or link title")
    source_url: Optional[str] = Field(None, alias="sourceUrl", description="Markdown url of the source")
    description: str = Field(description="A description of the issue")


class Claim(Issue):
    title: str = Field(description="The title of the claim")
    claim: str = Field(description="The claim being made")
    source: Optional[str] = Field(None, description="Name of the source or link title")
    description: str = Field(description="A description of the claim")


# Per-aspect issue shapes. Only the field wording differs, and it is part of what the model sees.

class Conflict(Issue):
    title: str = Field(description="The title of the conflict")
    description: str = Field(description="A description of the conflict")


class FairnessIssue(Issue):
    title: str = Field(description="The title of the fairness issue")
    description: str = Field(description="A description of the fairness issue")


class AccountabilityIssue(Issue):
    title: str = Field(description="The title of the accountability issue")
    description: str = Field(description="A description of the accountability issue")


class HarmMinimizationIssue(Issue):
    title: str = Field(description="The title of the harm minimization issue")
    description: str = Field(description="A description of the harm minimization issue")


class AttributionIssue(Issue):
    title: str = Field(description="The title of the attribution issue")
    description: str = Field(description="A description of the attribution issue")


class OriginalReportingIssue(Issue):
    title: str = Field(description="The title of the original reporting issue")
    description: str = Field(description="A description of the original reporting issue")


class ArticleClaims(BaseModel):
    claims: Optional[List[Claim]] = Field(None, description="The claims made in the article")
    conclusion: Optional[str] = Field(
        None,
        description="Conclusion drawn from the claims made. "
        "An example would be: The main claims are supported but require additional verification",
    )


class ArticleConflicts(BaseModel):
    conflicts: List[Conflict] = Field(description="The conflicts of interest in the article")
    conclusion: Optional[str] = Field(
        None,
        description="Conclusion drawn from the conflicts of interest. "
        "An example would be: No obvious conflicts of interest detected",
    )


class ArticleFairness(BaseModel):
    fairness: List[FairnessIssue] = Field(description="The fairness issues in the article")
    conclusion: Optional[str] = Field(
        None,
        description="Conclusion drawn from the fairness issues. "
        "An example would be: Multiple viewpoints are presented",
    )


class ArticleAccountabilities(BaseModel):
    accountabilities: List[AccountabilityIssue] = Field(description="The accountability issues in the article")
    conclusion: Optional[str] = Field(
        None,
        description="Conclusion drawn from the accountability issues. "
        "An example would be: Sources are cited but some need additional verification",
    )


class ArticleHarmMinimizations(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    harm_minimizations: List[HarmMinimizationIssue] = Field(
        alias="harmMinimizations", description="The harm minimization issues in the article"
    )
    conclusion: Optional[str] = Field(
        None,
        description="Conclusion drawn from the harm minimization issues. "
        "An example would be: Content appears to follow ethical guidelines",
    )


class ArticleAttributions(BaseModel):
    attributions: List[AttributionIssue] = Field(description="The attribution issues in the article")
    conclusion: Optional[str] = Field(
        None,
        description="Conclusion drawn from the attribution issues. "
        "An example would be: Most claims are properly attributed to sources",
    )


class ArticleOriginalReporting(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    original_reporting: List[OriginalReportingIssue] = Field(
        alias="originalReporting", description="The original reporting issues in the article"
    )
    conclusion: Optional[str] = Field(
        None,
        description="Conclusion drawn from the original reporting issues. "
        "An example would be: Some content appears to be derivative of other sources",
    )


class TrustResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    trust_level: TrustLevel = Field(
        alias="trustLevel", description="The trust level of the article"
    )
    trust_description: Optional[str] = Field(
        None, alias="trustDescription", description="The description of the trust level"
    )


# --- Response models ---

class ResultItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field("", alias="Title")
    source: str = Field("", alias="Source")
    source_url: str = Field("", alias="SourceUrl")
    description: str = Field("", alias="Description")


class AnalysisResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    truth_and_accuracy: List[ResultItem] = Field(default_factory=list, alias="TruthAndAccuracy")
    independence: List[ResultItem] = Field(default_factory=list, alias="Independence")
    fairness_and_impartiality: List[ResultItem] = Field(default_factory=list, alias="FairnessAndImpartiality")
    accountability: List[ResultItem] = Field(default_factory=list, alias="Accountability")
    harm_minimization: List[ResultItem] = Field(default_factory=list, alias="HarmMinimization")
    attribution: List[ResultItem] = Field(default_factory=list, alias="Attribution")
    original_reporting: List[ResultItem] = Field(default_factory=list, alias="OriginalReporting")

    def items_for(self, key: str) -> List[ResultItem]:
        """Return the items stored under an aspect key such as ``"Independence"``."""
        for name, field in type(self).model_fields.items():
            if field.alias == key:
                return getattr(self, name)
        raise KeyError(key)


class AspectSummary(BaseModel):
    label: str
    conclusion: Optional[str] = None
    status: Literal["ok", "degraded"] = "ok"
    error: Optional[str] = None


class TrustLevelResult(BaseModel):
    """Trust verdict as returned to the client. Both fields stay unset when classification failed."""

    model_config = ConfigDict(populate_by_name=True)

    trust_level: Optional[TrustLevel] = Field(None, alias="TrustLevel")
    trust_description: Optional[str] = Field(None, alias="TrustDescription")


class RequestState(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str
    article: Optional[NewsArticle] = None
    result: Optional[AnalysisResult] = None
    trust_level: Optional[TrustLevelResult] = Field(None, alias="trustLevel")
    aspects: Dict[str, AspectSummary] = Field(default_factory=dict)
    error: Optional[str] = None
