"""
Router for tax analysis endpoints.

Handles:
- Merging uploaded tax documents and summarizing them with the AI model
- Tax liability calculation from raw user data
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, File, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from ..dependencies import require_ai_service, require_pdf_merger, require_storage
from ..models import ErrorResponse, MergeSummaryResponse, TaxCalculationResponse
from ..services.ai import AIService, extract_json_block
from ..services.pdf_service import PDFMergerService
from ..services.storage import TempStorage, receive_uploads

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["tax"])

MERGE_SUCCESS_MESSAGE = "Merged PDF created and summarized successfully!"
MERGE_FAILED_MESSAGE = "Could not merge or summarize PDFs."
CALCULATION_SUCCESS_MESSAGE = "Calculated Tax"
CALCULATION_FAILED_MESSAGE = "Could Not Calculate"

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorResponse},
}


def _failure(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error=message).model_dump(),
    )


@router.post(
    "/merge-and-summarize",
    response_model=MergeSummaryResponse,
    responses=ERROR_RESPONSES,
)
async def merge_and_summarize(
    storage: Annotated[TempStorage, Depends(require_storage)],
    merger: Annotated[PDFMergerService, Depends(require_pdf_merger)],
    ai_service: Annotated[AIService, Depends(require_ai_service)],
    files: Annotated[
        list[UploadFile] | None, File(description="PDF files to merge, in order")
    ] = None,
) -> MergeSummaryResponse | JSONResponse:
    """
    Merge uploaded PDFs and ask the AI model for a regime comparison.

    Uploads and the merged file only live for the duration of the request.
    A model answer without a usable JSON block still succeeds with empty data.
    """
    try:
        with storage.scope() as scope:
            uploads = await receive_uploads(files or [], scope)
            logger.info(
                "Merging %d upload(s): %s",
                len(uploads),
                [u.original_name for u in uploads],
            )

            merged = await run_in_threadpool(
                merger.merge, [u.path for u in uploads], scope.root
            )
            scope.track(merged.path, keep=storage.keep_merged)

            generated_text = await ai_service.analyze_document(
                merged.as_base64(), filename=merged.filename
            )
    except Exception:
        logger.exception("Error merging/summarizing PDFs")
        return _failure(MERGE_FAILED_MESSAGE)

    outcome = extract_json_block(generated_text)
    if outcome.is_empty:
        logger.warning(
            "Returning empty data for %s: %s", merged.unique_id, outcome.reason
        )

    return MergeSummaryResponse(
        message=MERGE_SUCCESS_MESSAGE,
        unique_id=merged.unique_id,
        merged_pdf=merged.filename,
        data=outcome.data,
    )


@router.post(
    "/calculateTax",
    response_model=TaxCalculationResponse,
    responses=ERROR_RESPONSES,
)
async def calculate_tax(
    ai_service: Annotated[AIService, Depends(require_ai_service)],
    user_data: Annotated[Any, Body()] = None,
) -> TaxCalculationResponse | JSONResponse:
    """
    Calculate tax liability and effective rate from user-entered data.

    The request body is treated as opaque and passed to the model unvalidated.
    """
    try:
        generated_text = await ai_service.calculate_tax(user_data)
    except Exception:
        logger.exception("Error Calculating Tax")
        return _failure(CALCULATION_FAILED_MESSAGE)

    outcome = extract_json_block(generated_text)
    return TaxCalculationResponse(
        message=CALCULATION_SUCCESS_MESSAGE,
        data=outcome.data,
    )
