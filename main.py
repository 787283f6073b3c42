from typing import Dict, List, Optional

import structlog
from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import Field, ValidationError
from pymongo.errors import PyMongoError

from compatibility import check_compatibility
from config import get_settings
from database import db, get_documents
from filters import (
    SortMode,
    candidates_by_category,
    filter_options,
    is_low_stock,
    search_parts,
    sort_parts,
)
from logging_config import configure_logging
from quote import compute_quote
from schemas import (
    ADDON_CATEGORIES,
    BASE_CATEGORIES,
    CamelModel,
    Category,
    CompatibilityReport,
    FilterSet,
    Part,
    PricingConfig,
    Quote,
    Selection,
)
from seed_data import SEED_PARTS
from selection import add_addon, select_part
from smart_sync import clear_filters, derive_filters, sync_filters

configure_logging()
logger = structlog.get_logger(__name__)

app = FastAPI(title="PC Build Configurator API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Utility to convert Mongo document to JSON-serializable dict

def serialize_doc(doc):
    if not doc:
        return doc
    doc = dict(doc)
    if "_id" in doc:
        doc["_id"] = str(doc["_id"])
    return doc


def get_catalog() -> List[Part]:
    if db is None:
        raise HTTPException(status_code=500, detail="Database not configured")
    parts: List[Part] = []
    for doc in get_documents("part"):
        try:
            parts.append(Part.model_validate(serialize_doc(doc)))
        except ValidationError as exc:
            logger.warning("invalid_part_document", doc_id=str(doc.get("_id")), errors=exc.error_count())
    return parts


def resolve_selection(req: "SelectionRequest", catalog: List[Part]) -> Selection:
    by_id = {part.id: part for part in catalog}
    selection = Selection()

    for category, part_id in req.base.items():
        if not part_id:
            continue
        part = by_id.get(part_id)
        if part is None:
            logger.info("part_not_found", category=category.value, part_id=part_id)
            raise HTTPException(status_code=404, detail=f"Part not found for {category.value}: {part_id}")
        try:
            selection = select_part(selection, category, part)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))

    for item in req.addons:
        product = by_id.get(item.id)
        if product is None:
            logger.info("part_not_found", category="addon", part_id=item.id)
            raise HTTPException(status_code=404, detail=f"Add-on not found: {item.id}")
        try:
            selection = add_addon(selection, product, item.qty)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))

    return selection


# Request/Response models
class AddonRequest(CamelModel):
    id: str
    qty: int = Field(1, ge=1)


class SelectionRequest(CamelModel):
    base: Dict[Category, Optional[str]] = Field(default_factory=dict)  # category -> part id
    addons: List[AddonRequest] = Field(default_factory=list)


class DeriveFiltersRequest(SelectionRequest):
    filters: FilterSet = Field(default_factory=FilterSet)


class ClearFiltersRequest(CamelModel):
    filters: FilterSet = Field(default_factory=FilterSet)
    field: Optional[str] = None  # None clears every field


class CandidatesRequest(CamelModel):
    filters: FilterSet = Field(default_factory=FilterSet)
    sort: SortMode = SortMode.DEFAULT
    categories: List[Category] = Field(default_factory=lambda: list(BASE_CATEGORIES))


class QuoteRequest(SelectionRequest):
    pricing: Optional[PricingConfig] = None
    required: Optional[List[Category]] = None


class EvaluateRequest(QuoteRequest):
    filters: FilterSet = Field(default_factory=FilterSet)
    smart_sync: bool = Field(True, alias="smartSync")
    sort: SortMode = SortMode.DEFAULT


class Candidate(Part):
    low_stock: bool = Field(False, alias="lowStock")


class EvaluateResponse(CamelModel):
    compatibility: CompatibilityReport
    filters: FilterSet
    candidates: Dict[Category, List[Candidate]]
    quote: Quote


def candidate_lists(catalog: List[Part], filters: FilterSet, categories, sort: SortMode) -> Dict[Category, List[Candidate]]:
    threshold = get_settings().low_stock_threshold
    lists = candidates_by_category(catalog, filters, categories=categories, sort=sort)
    return {
        category: [
            Candidate(**part.model_dump(), low_stock=is_low_stock(part, threshold))
            for part in parts
        ]
        for category, parts in lists.items()
    }


def quote_for(selection: Selection, req: QuoteRequest) -> Quote:
    settings = get_settings()
    pricing = req.pricing if req.pricing is not None else settings.default_pricing
    required = req.required if req.required is not None else settings.required_categories
    return compute_quote(selection, pricing, required)


@app.get("/")
def root():
    return {"message": "PC Build Configurator API"}


@app.get("/api/categories")
def list_categories():
    return {
        "base": [c.value for c in BASE_CATEGORIES],
        "addons": [c.value for c in ADDON_CATEGORIES],
        "required": [c.value for c in get_settings().required_categories],
    }


@app.get("/api/parts", response_model=List[Part])
def list_parts(
    category: Optional[Category] = None,
    q: Optional[str] = None,
    sort: SortMode = SortMode.DEFAULT,
    in_stock: bool = False,
    catalog: List[Part] = Depends(get_catalog),
):
    parts = [p for p in catalog if category is None or p.category == category]
    if in_stock:
        parts = [p for p in parts if p.stock > 0]
    return sort_parts(search_parts(parts, q), sort)


@app.get("/api/filter-options")
def get_filter_options(catalog: List[Part] = Depends(get_catalog)):
    return filter_options(catalog)


@app.post("/api/seed")
def seed_parts():
    if db is None:
        raise HTTPException(status_code=500, detail="Database not configured")

    # Only seed if empty
    count = db["part"].count_documents({})
    if count == 0:
        db["part"].insert_many([dict(doc) for doc in SEED_PARTS])
        logger.info("catalog_seeded", inserted=len(SEED_PARTS))
        return {"inserted": len(SEED_PARTS)}
    else:
        return {"message": "Parts already seeded", "count": count}


@app.post("/api/compatibility", response_model=CompatibilityReport)
def compatibility(req: SelectionRequest, catalog: List[Part] = Depends(get_catalog)):
    selection = resolve_selection(req, catalog)
    return check_compatibility(selection.base)


@app.post("/api/filters/derive", response_model=FilterSet)
def derive(req: DeriveFiltersRequest, catalog: List[Part] = Depends(get_catalog)):
    selection = resolve_selection(req, catalog)
    return derive_filters(selection.base, req.filters)


@app.post("/api/filters/clear", response_model=FilterSet)
def clear(req: ClearFiltersRequest):
    try:
        return clear_filters(req.filters, req.field)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.post("/api/candidates", response_model=Dict[Category, List[Candidate]])
def candidates(req: CandidatesRequest, catalog: List[Part] = Depends(get_catalog)):
    return candidate_lists(catalog, req.filters, req.categories, req.sort)


@app.post("/api/quote", response_model=Quote)
def quote(req: QuoteRequest, catalog: List[Part] = Depends(get_catalog)):
    selection = resolve_selection(req, catalog)
    return quote_for(selection, req)


@app.post("/api/evaluate", response_model=EvaluateResponse)
def evaluate_build(req: EvaluateRequest, catalog: List[Part] = Depends(get_catalog)):
    selection = resolve_selection(req, catalog)

    filters = sync_filters(selection.base, req.filters, enabled=req.smart_sync)
    report = check_compatibility(selection.base)

    return EvaluateResponse(
        compatibility=report,
        filters=filters,
        candidates=candidate_lists(catalog, filters, BASE_CATEGORIES, req.sort),
        quote=quote_for(selection, req),
    )


@app.get("/test")
def test_database():
    """Service diagnostics: database reachability and the active settings."""
    settings = get_settings()
    response = {
        "backend": "running",
        "database_configured": bool(settings.database_url and settings.database_name),
        "database_name": settings.database_name,
        "connection_status": "not configured",
        "collections": [],
        "required_categories": [category.value for category in settings.required_categories],
        "low_stock_threshold": settings.low_stock_threshold,
    }
    if db is None:
        return response
    try:
        response["collections"] = sorted(db.list_collection_names())[:10]
        response["connection_status"] = "connected"
    except PyMongoError as exc:
        logger.warning("database_check_failed", error=str(exc))
        response["connection_status"] = f"error: {str(exc)[:50]}"
    return response


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)
