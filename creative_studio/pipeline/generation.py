"""
LangChain-based generation client that turns a prompt into a single HTML document.
"""

from datetime import datetime
from typing import Any, List, Optional

import openai
from langchain_core.messages import BaseMessage
from langchain_core.prompts import ChatPromptTemplate
from langchain_openai import ChatOpenAI

from creative_studio.config import DEFAULT_API_BASE
from creative_studio.errors import ApiError
from creative_studio.models import (
    MODEL_ID,
    GeneratedCode,
    GenerationFailure,
    GenerationRequest,
    GenerationResult,
    GenerationSuccess,
)
from creative_studio.utils.llm_logger import LoggedLLM, get_logger, token_usage


PROVIDER = "groq"

PROMPT_TEMPLATE = (
    "Create a complete HTML file for: {prompt}. Include all CSS and JavaScript "
    "inline. Make it fully functional and visually appealing. Return only the "
    "HTML code without any explanations."
)

GENERIC_FAILURE_MESSAGE = "Generation request failed"


class GenerationClient:
    """Issues one chat-completion request per prompt and returns the code it produced."""

    def __init__(
        self,
        api_base: str = DEFAULT_API_BASE,
        model_name: str = MODEL_ID,
        http_client: Optional[Any] = None,
    ):
        """
        Initialize the client.

        Args:
            api_base: Base URL of the OpenAI-compatible endpoint.
            model_name: Model identifier sent with every request.
            http_client: Optional ``httpx.Client`` used for the transport.
        """
        self.api_base = api_base
        self.model_name = model_name
        self.http_client = http_client
        self.prompt = ChatPromptTemplate.from_messages([("human", PROMPT_TEMPLATE)])
        self.logger = get_logger()

    def _create_llm(self, credential: str) -> LoggedLLM:
        # No retries, no explicit timeout beyond the transport default.
        llm = ChatOpenAI(
            model=self.model_name,
            api_key=credential,
            base_url=self.api_base,
            max_retries=0,
            http_client=self.http_client,
        )
        return LoggedLLM(
            llm_instance=llm,
            component="generator",
            provider=PROVIDER,
            model=self.model_name,
            metadata={"api_base": self.api_base},
        )

    def build_messages(self, prompt_text: str) -> List[BaseMessage]:
        """
        Create prompt messages for the model.

        Args:
            prompt_text: User's project description.

        Returns:
            A single user message instructing the model to emit one HTML file.
        """
        return self.prompt.format_messages(prompt=prompt_text)

    def _failure(
        self, error: ApiError, cause: Exception, llm: Optional[LoggedLLM]
    ) -> GenerationFailure:
        call_id = llm.last_call_id if llm is not None else ""
        self.logger.log_error("generator", cause, call_id=call_id)
        return GenerationFailure(
            kind=error.kind,
            message=error.message,
            status_code=error.status_code,
        )

    def generate(self, prompt_text: str, credential: str) -> GenerationResult:
        """
        Generate a self-contained HTML document for the prompt.

        Input validation is the caller's job; this method only performs the
        request and classifies the outcome.

        Args:
            prompt_text: User's project description.
            credential: Bearer token for the generation service.

        Returns:
            GenerationSuccess with the response content taken verbatim, or
            GenerationFailure describing what went wrong.
        """
        request = GenerationRequest(
            prompt_text=prompt_text,
            credential=credential,
            model_id=self.model_name,
        )

        llm = None
        try:
            llm = self._create_llm(request.credential)
            response = llm.invoke(self.build_messages(request.prompt_text))
            code = response.content
            if not isinstance(code, str) or not code:
                raise ApiError("Response has no message content")
        except openai.APIStatusError as e:
            return self._failure(
                ApiError(f"API Error: {e.status_code}", status_code=e.status_code), e, llm
            )
        except Exception as e:
            return self._failure(ApiError(GENERIC_FAILURE_MESSAGE), e, llm)

        usage = token_usage(response)

        return GenerationSuccess(
            generated=GeneratedCode(
                code=code,
                model_name=request.model_id,
                generation_timestamp=datetime.now(),
                prompt_tokens=usage.get("prompt_tokens"),
                completion_tokens=usage.get("completion_tokens"),
                generation_metadata={
                    "provider": PROVIDER,
                    "api_base": self.api_base,
                },
            )
        )
