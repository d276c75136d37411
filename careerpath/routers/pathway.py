# careerpath/routers/pathway.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, ConfigDict, Field

from careerpath.core.ai_core import analyze_skill_gap, generate_career_pathway
from careerpath.core.client import GeminiClient
from careerpath.core.errors import CareerServiceError
from careerpath.core.schemas import CareerPathway, Skill
from careerpath.dependencies import get_gemini_client, raise_http_error

router = APIRouter()


class PathwayRequest(BaseModel):
    goal: str = Field(min_length=1)
    background: str = ""


class SkillGapRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_skills: List[str] = Field(default_factory=list, alias="currentSkills")
    target_role: str = Field(min_length=1, alias="targetRole")


@router.post("/generate", response_model=CareerPathway)
async def generate_pathway_endpoint(
    request: PathwayRequest,
    client: GeminiClient = Depends(get_gemini_client)
):
    try:
        return await run_in_threadpool(generate_career_pathway, request.goal, request.background, client)
    except CareerServiceError as e:
        raise_http_error(e)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/skill-gap", response_model=List[Skill])
async def skill_gap_endpoint(
    request: SkillGapRequest,
    client: GeminiClient = Depends(get_gemini_client)
):
    try:
        return await run_in_threadpool(analyze_skill_gap, request.current_skills, request.target_role, client)
    except CareerServiceError as e:
        raise_http_error(e)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
