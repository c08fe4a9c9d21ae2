from fastapi import APIRouter

from reflect.schemas.analysis import AnalysisResult, AnalyzeRequest, ReframeRequest, ReframeResponse
from reflect.services.analysis_service import get_analysis_service
from reflect.services.reframing_service import get_reframing_service

router = APIRouter()


@router.post("/analyze", response_model=AnalysisResult)
async def analyze(body: AnalyzeRequest):
    """Analyze one journal entry. Always answers with a complete result."""
    return await get_analysis_service().analyze_entry(body.text, body.toolkit, body.ai_enabled)


@router.post("/reframe", response_model=ReframeResponse)
async def reframe(body: ReframeRequest):
    reframed = await get_reframing_service().generate_reframed_thought(
        body.original_thought, body.distortion_type, body.user_context
    )
    return ReframeResponse(reframed_thought=reframed)
