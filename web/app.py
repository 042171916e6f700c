"""
Web API for the flight logbook exporter.

Upload a logbook workbook (.xlsx with a "Flights" sheet) and get back the
EASA-format logbook PDF and the map of visited airports.

Usage:
    python -m uvicorn web.app:app --reload
    # Open http://localhost:8000
"""

import os
import shutil
import sys
import tempfile
import uuid
from io import StringIO
from pathlib import Path

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import FileResponse, JSONResponse

# Ensure project root is on the path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from logbook import __version__
from logbook.config import Config
from logbook.errors import LogbookError
from logbook.exporter import export_logbook, load_records
from logbook.route_map import render_route_map

app = FastAPI(title="EASA Flight Logbook Exporter", version=__version__)

ALLOWED_EXTENSIONS = ('.xlsx', '.xlsm')

# Store completed jobs for download (job_id -> file paths)
_jobs = {}


@app.get("/")
async def index():
    """Describe the API."""
    return {
        'name': app.title,
        'version': __version__,
        'export': '/api/export',
    }


@app.post("/api/export")
async def export(
    file: UploadFile = File(...),
    owner: str = Form("Logbook Owner"),
    page_breaks: str = Form(""),
    reverse: bool = Form(True),
    start_row: int = Form(20),
    filter_date: str = Form(""),
    no_routes: bool = Form(False),
):
    """Convert an uploaded workbook to a logbook PDF and airports map.

    Runs the full pipeline:
    1. Read and decode the "Flights" sheet
    2. Export the EASA logbook PDF
    3. Render the airports map

    Returns JSON with stats and download URLs.
    """
    # Validate file
    if not file.filename:
        raise HTTPException(400, "No file uploaded")

    ext = os.path.splitext(file.filename)[1].lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(400, f"Unsupported file type: {ext}. Use an Excel workbook (.xlsx).")

    # Create temp directory for this job
    job_id = str(uuid.uuid4())[:8]
    work_dir = tempfile.mkdtemp(prefix=f"logbook_{job_id}_")

    try:
        # Save uploaded file
        upload_path = os.path.join(work_dir, os.path.basename(file.filename))
        with open(upload_path, "wb") as f:
            f.write(await file.read())

        config = Config()
        config.override(
            source_type='xlsx',
            file_name=upload_path,
            start_row=start_row,
            owner=owner,
            page_breaks=page_breaks,
            reverse=reverse,
            filter_date=filter_date,
            filter_no_routes=no_routes,
            logbook_output=os.path.join(work_dir, "logbook.pdf"),
            map_output=os.path.join(work_dir, "map.png"),
        )

        # Capture stdout
        old_stdout = sys.stdout
        sys.stdout = log_capture = StringIO()

        try:
            records = load_records(config)
            result = export_logbook(config, records)
            summary = render_route_map(config, records)
        finally:
            sys.stdout = old_stdout

    except LogbookError as e:
        shutil.rmtree(work_dir, ignore_errors=True)
        return JSONResponse(
            status_code=422,
            content={'success': False, 'error': str(e)},
        )
    except Exception as e:
        # Cleanup on error
        shutil.rmtree(work_dir, ignore_errors=True)
        return JSONResponse(
            status_code=500,
            content={'success': False, 'error': str(e)},
        )

    totals = result['totals']
    stats = {
        'flights': result['flights'],
        'logbook_pages': len(result['pages']),
        'pdf_pages': result['pdf_pages'],
        'total_time': totals.times.total.render_for_totals(),
        'day_landings': totals.landings.day,
        'night_landings': totals.landings.night,
        'airports': len(summary.airports),
        'routes': len(summary.routes),
    }

    # Store for download
    _jobs[job_id] = {
        'logbook_file': config.logbook_output,
        'map_file': config.map_output,
        'work_dir': work_dir,
    }

    return JSONResponse({
        'success': True,
        'job_id': job_id,
        'stats': stats,
        'logbook_url': f'/api/download/{job_id}/logbook',
        'map_url': f'/api/download/{job_id}/map',
        'log': log_capture.getvalue(),
    })


def _job_file(job_id, key):
    job = _jobs.get(job_id)
    if not job or not os.path.exists(job[key]):
        raise HTTPException(404, "File not found or expired")
    return job[key]


@app.get("/api/download/{job_id}/logbook")
async def download_logbook(job_id: str):
    """Download the logbook PDF."""
    return FileResponse(
        _job_file(job_id, 'logbook_file'),
        media_type="application/pdf",
        filename="logbook.pdf",
    )


@app.get("/api/download/{job_id}/map")
async def download_map(job_id: str):
    """Download the airports map."""
    return FileResponse(
        _job_file(job_id, 'map_file'),
        media_type="image/png",
        filename="map.png",
    )
