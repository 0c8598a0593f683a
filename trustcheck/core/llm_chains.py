import os
import logging
from functools import lru_cache

from langchain_core.prompts import ChatPromptTemplate
from langchain_openai import AzureChatOpenAI


EXTRACTION_SYSTEM_PROMPT = """You are an expert extraction algorithm on markdown text content.
Only extract relevant information from the article.
If you do not know the value of an attribute asked to extract,
return null for the attribute's value"""

METADATA_SYSTEM_PROMPT = """You are an expert extraction algorithm.
Only extract relevant information from the article.
If you do not know the value of an attribute asked to extract,
return null for the attribute's value"""

TRUST_SYSTEM_PROMPT = """You are an expert classification algorithm of news articles
in a JSON format.

Classify the trust level of the article based on the following levels:
- High: The article is highly trustworthy
- Medium: The article is somewhat trustworthy
- Low: The article is not trustworthy
- Unknown: There is not enough information to judge the article

Motivate your classification with a short description.
Like: 'The article is highly trustworthy because it has a high level of accountability and fairness.'"""


@lru_cache(maxsize=1)
def get_chat_llm() -> AzureChatOpenAI:
    """Process-wide chat model. Built once and shared by every chain."""
    deployment = os.environ.get("AZURE_OPENAI_DEPLOYMENT", "gpt-4o")
    logging.info(f"Building Azure OpenAI chat model (deployment={deployment})")
    return AzureChatOpenAI(
        azure_deployment=deployment,
        api_version=os.environ.get("AZURE_OPENAI_API_VERSION"),
        azure_endpoint=os.environ.get("AZURE_OPENAI_ENDPOINT"),
        api_key=os.environ.get("AZURE_OPENAI_KEY"),
        temperature=float(os.environ.get("LLM_TEMPERATURE", "0")),
    )


def build_prompt(system_prompt: str) -> ChatPromptTemplate:
    # system text is literal; only {text} is a template variable
    return ChatPromptTemplate.from_messages([
        ("system", system_prompt.replace("{", "{{").replace("}", "}}")),
        ("human", "{text}"),
    ])
