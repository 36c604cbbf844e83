"""FastAPI 백엔드 서버 - Guillot 웹 애플리케이션"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from ..packing import InputValidationError, Item
from ..strategies import GuillotineSearchPacker

app = FastAPI(title="Guillot - 이미지 페이지 배치")

# CORS 설정 (개발 환경용)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ItemInput(BaseModel):
    """이미지 입력 모델"""
    id: str
    width: int
    height: int
    rotatable: bool | None = None


class PackRequest(BaseModel):
    """배치 요청 모델"""
    page_width: int = Field(gt=0)
    page_height: int = Field(gt=0)
    spacing: int = Field(default=0, ge=0)
    margin: int = Field(default=0, ge=0)
    allow_rotation: bool = False
    enough: float = Field(default=1.0, ge=0.5, le=1.0)
    items: list[ItemInput]


class PlacementOutput(BaseModel):
    id: str
    x: int
    y: int
    width: int
    height: int
    rotated: bool


class CutOutput(BaseModel):
    direction: str
    position: int
    start: int
    end: int


class PageOutput(BaseModel):
    placements: list[PlacementOutput]
    cuts: list[CutOutput]
    covered_area: int


class PackResponse(BaseModel):
    """배치 응답 모델"""
    success: bool
    total_items: int
    placed_items: int
    pages_used: int
    pages: list[PageOutput]


@app.post("/api/pack", response_model=PackResponse)
def calculate_layout(request: PackRequest):
    """페이지 배치 계산 API"""
    if not request.items:
        raise HTTPException(status_code=400, detail="이미지 정보가 없습니다")

    try:
        packer = GuillotineSearchPacker(
            request.page_width,
            request.page_height,
            spacing=request.spacing,
            margin=request.margin,
            allow_rotation=request.allow_rotation,
            enough=request.enough,
        )
        items = [Item(i.id, i.width, i.height, i.rotatable) for i in request.items]
        pages = packer.pack(items)
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    page_outputs = [
        PageOutput(
            placements=[
                PlacementOutput(id=p.id, x=p.x, y=p.y, width=p.width, height=p.height, rotated=p.rotated)
                for p in page.placements
            ],
            cuts=[
                CutOutput(direction=c.direction, position=c.position, start=c.start, end=c.end)
                for c in page.cuts
            ],
            covered_area=page.covered_area,
        )
        for page in pages
    ]

    return PackResponse(
        success=True,
        total_items=len(request.items),
        placed_items=sum(len(page.placements) for page in pages),
        pages_used=len(pages),
        pages=page_outputs,
    )
