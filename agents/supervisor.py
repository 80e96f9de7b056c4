import logging
from dataclasses import replace
from typing import Any, Dict, Optional

from agents.decision_simplification import DecisionSimplificationAgent
from agents.explanation import ExplanationAgent
from agents.llm_client import ChatCompletionClient
from agents.price_intelligence import PriceIntelligenceAgent
from agents.product_retrieval import ProductRetrievalAgent
from agents.review_intelligence import ReviewIntelligenceAgent
from agents.scoring import ScoringAgent
from agents.web_search import WebSearchAgent
from config import Settings
from models import Fallback, PipelineContext, WeightVector

logger = logging.getLogger(__name__)

STAGE_COUNT = 6


class SupervisorAgent:
    """
    Runs the six recommendation stages strictly in order and threads an
    immutable PipelineContext through them. Does no analysis of its own.
    """

    def __init__(
        self,
        retrieval: Optional[ProductRetrievalAgent] = None,
        reviews: Optional[ReviewIntelligenceAgent] = None,
        pricing: Optional[PriceIntelligenceAgent] = None,
        scoring: Optional[ScoringAgent] = None,
        decision: Optional[DecisionSimplificationAgent] = None,
        explanation: Optional[ExplanationAgent] = None,
    ):
        self.retrieval = retrieval or ProductRetrievalAgent()
        self.reviews = reviews or ReviewIntelligenceAgent()
        self.pricing = pricing or PriceIntelligenceAgent()
        self.scoring = scoring or ScoringAgent()
        self.decision = decision or DecisionSimplificationAgent()
        self.explanation = explanation or ExplanationAgent()

    @classmethod
    def from_settings(cls, settings: Settings) -> "SupervisorAgent":
        if not settings.api_key:
            logger.warning("OPENROUTER_API_KEY not set; using static catalogs and heuristic review insights.")
            return cls()
        client = ChatCompletionClient(
            settings.api_key,
            base_url=settings.base_url,
            timeout=settings.request_timeout,
        )
        return cls(
            retrieval=ProductRetrievalAgent(WebSearchAgent(client, settings.search_model)),
            reviews=ReviewIntelligenceAgent(client, settings.review_model),
        )

    def run(
        self,
        query: str,
        weights: Optional[WeightVector] = None,
        user_profile: Optional[Dict[str, Any]] = None,
    ) -> PipelineContext:
        ctx = PipelineContext(
            query=query,
            weights=weights or WeightVector(),
            user_profile=dict(user_profile or {}),
        )
        logger.info("Processing query %r", query)
        fallbacks: Dict[str, str] = {}

        logger.info("[1/%d] Product retrieval", STAGE_COUNT)
        retrieved = self.retrieval.retrieve(query)
        if isinstance(retrieved, Fallback):
            fallbacks["retrieval"] = retrieved.reason
        ctx = replace(ctx, products=tuple(retrieved.data))
        logger.info("Found %d products", len(ctx.products))

        logger.info("[2/%d] Review intelligence", STAGE_COUNT)
        reviewed = self.reviews.analyze(list(ctx.products))
        if isinstance(reviewed, Fallback):
            fallbacks["reviews"] = reviewed.reason
        ctx = replace(ctx, review_insights=tuple(reviewed.data))
        logger.info("Analyzed reviews for %d products", len(ctx.review_insights))

        logger.info("[3/%d] Price intelligence", STAGE_COUNT)
        ctx = replace(ctx, price_insights=tuple(self.pricing.analyze(list(ctx.products))))

        logger.info("[4/%d] Scoring", STAGE_COUNT)
        scored = self.scoring.score(
            list(ctx.products),
            list(ctx.review_insights),
            list(ctx.price_insights),
            ctx.weights,
        )
        ctx = replace(ctx, scored_products=tuple(scored))

        logger.info("[5/%d] Decision simplification", STAGE_COUNT)
        ctx = replace(ctx, top_picks=self.decision.select(list(ctx.scored_products)))

        logger.info("[6/%d] Explanation", STAGE_COUNT)
        reasoning = self.explanation.explain(ctx.top_picks, list(ctx.scored_products))
        ctx = replace(ctx, reasoning=tuple(reasoning), fallbacks=fallbacks)

        logger.info("Pipeline complete for %r (fallbacks: %s)", query, ", ".join(fallbacks) or "none")
        return ctx
