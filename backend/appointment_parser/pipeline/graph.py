from langgraph.graph import StateGraph, END
from typing import Optional

from .state import PipelineState, create_initial_state
from .nodes import PipelineNodes
from ..schemas import ParseResult
from ..tools.text_normalizer import TextNormalizer, text_normalizer
from ..tools.entity_extractor import EntityExtractor, entity_extractor
from ..tools.time_parser import TemporalResolver, temporal_resolver
from ..tools.confidence import ConfidenceScorer, confidence_scorer
from ..tools.guardrail import GuardrailDecision, guardrail as default_guardrail
from ..utils.logger import logger


def create_parse_graph(nodes: PipelineNodes):
    workflow = StateGraph(PipelineState)

    workflow.add_node("normalize", nodes.normalize)
    workflow.add_node("extract", nodes.extract)
    workflow.add_node("resolve", nodes.resolve)
    workflow.add_node("score", nodes.score)
    workflow.add_node("decide", nodes.decide)

    workflow.set_entry_point("normalize")

    workflow.add_edge("normalize", "extract")
    workflow.add_edge("extract", "resolve")
    workflow.add_edge("resolve", "score")
    workflow.add_edge("score", "decide")
    workflow.add_edge("decide", END)

    app = workflow.compile()
    logger.info("Compiled appointment parse pipeline")
    return app


class ParsePipeline:
    """
    Runs raw request text through normalize -> extract -> resolve -> score -> decide.

    Components default to the process-wide instances built from settings; tests
    pass their own (for example a resolver with a fixed clock).
    """

    def __init__(
        self,
        normalizer: Optional[TextNormalizer] = None,
        extractor: Optional[EntityExtractor] = None,
        resolver: Optional[TemporalResolver] = None,
        scorer: Optional[ConfidenceScorer] = None,
        guardrail: Optional[GuardrailDecision] = None
    ):
        self.nodes = PipelineNodes(
            normalizer=normalizer or text_normalizer,
            extractor=extractor or entity_extractor,
            resolver=resolver or temporal_resolver,
            scorer=scorer or confidence_scorer,
            guardrail=guardrail or default_guardrail
        )
        self.graph = create_parse_graph(self.nodes)

    def parse_text(self, text: Optional[str]) -> ParseResult:
        state = create_initial_state(text)
        result = self.graph.invoke(state)
        return result["result"]


parse_pipeline = ParsePipeline()


def parse_text(text: Optional[str]) -> ParseResult:
    return parse_pipeline.parse_text(text)
