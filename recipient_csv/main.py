from fastapi import FastAPI, UploadFile, File, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from .config import configure_logging, settings
from .decode import check_upload_size, decode_upload
from .errors import CsvParseError, UndecodableUpload, UploadTooLarge
from .export import export_filename, recipients_to_csv, template_csv
from .models import ExportRequest, HealthResponse, ParseResponse, ParseSummary
from .parse import parse_recipients
from .rules import TEMPLATE_FILENAME

configure_logging(settings)

app = FastAPI(
    title="recipient-csv",
    description="Validated certificate recipient lists from uploaded CSV files",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _csv_attachment(content: str, filename: str) -> Response:
    return Response(
        content=content.encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/recipients/parse", response_model=ParseResponse)
async def parse_upload(file: UploadFile = File(...)):
    if not (file.filename or "").lower().endswith(".csv"):
        raise HTTPException(status_code=422, detail="Only CSV files are supported")

    raw = await file.read()
    try:
        check_upload_size(raw)
        text = decode_upload(raw)
        result = parse_recipients(text)
    except UploadTooLarge as exc:
        raise HTTPException(status_code=413, detail=exc.to_detail()) from exc
    except (UndecodableUpload, CsvParseError) as exc:
        raise HTTPException(status_code=422, detail=exc.to_detail()) from exc

    return ParseResponse(
        recipients=result.recipients,
        skipped=result.skipped,
        summary=ParseSummary(
            recipients=len(result.recipients),
            skipped=len(result.skipped),
        ),
    )


@app.get("/recipients/template")
def download_template():
    return _csv_attachment(template_csv(), TEMPLATE_FILENAME)


@app.post("/recipients/export")
def export_recipients(body: ExportRequest):
    filename = export_filename(body.event_title, len(body.recipients))
    return _csv_attachment(recipients_to_csv(body.recipients), filename)
