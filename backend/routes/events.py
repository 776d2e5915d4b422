import asyncio
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from errors import IOFailure
from models.result import RecordResult
from recorder.client import ClientRecorder

router = APIRouter(prefix="/events", tags=["events"])


# ---------- Request schemas ----------
# Fields are optional on purpose: null/empty checks belong to the event
# builder so HTTP callers get the same InvalidArgument as in-process ones.

class TextChangeRequest(BaseModel):
    text: Optional[str] = None
    offset: int = 0
    length: int = 0
    source_file: Optional[str] = None
    change_origin: Optional[str] = None


class PathRequest(BaseModel):
    path: Optional[str] = None


class TestRunRequest(BaseModel):
    test_address: Optional[str] = None
    test_result: Optional[str] = None


class LaunchRequest(BaseModel):
    launch_time: Optional[str] = None
    entry_point: Optional[str] = None
    attributes: Optional[dict[str, Any]] = None


class LaunchEndRequest(BaseModel):
    launch_time: Optional[str] = None


# ---------- Helpers ----------

def get_recorder(request: Request) -> ClientRecorder:
    return request.app.state.recorder


def _check(result: RecordResult) -> RecordResult:
    if result.error == "InvalidArgument":
        raise HTTPException(status_code=400, detail=result.detail)
    if result.error == "IOFailure":
        raise HTTPException(status_code=503, detail=result.detail)
    return result


# ---------- Endpoints ----------

@router.post("/text-change", response_model=RecordResult)
async def text_change(body: TextChangeRequest, recorder: ClientRecorder = Depends(get_recorder)):
    result = await asyncio.to_thread(
        recorder.record_text_change,
        body.text, body.offset, body.length, body.source_file, body.change_origin,
    )
    return _check(result)


@router.post("/file-open", response_model=RecordResult)
async def file_open(body: PathRequest, recorder: ClientRecorder = Depends(get_recorder)):
    return _check(await asyncio.to_thread(recorder.record_file_open, body.path))


@router.post("/file-close", response_model=RecordResult)
async def file_close(body: PathRequest, recorder: ClientRecorder = Depends(get_recorder)):
    return _check(await asyncio.to_thread(recorder.record_file_close, body.path))


@router.post("/file-save", response_model=RecordResult)
async def file_save(body: PathRequest, recorder: ClientRecorder = Depends(get_recorder)):
    return _check(await asyncio.to_thread(recorder.record_file_save, body.path))


@router.post("/test-run", response_model=RecordResult)
async def test_run(body: TestRunRequest, recorder: ClientRecorder = Depends(get_recorder)):
    result = await asyncio.to_thread(recorder.record_test_run, body.test_address, body.test_result)
    return _check(result)


@router.post("/snapshot", response_model=RecordResult)
async def snapshot(body: PathRequest, recorder: ClientRecorder = Depends(get_recorder)):
    return _check(await asyncio.to_thread(recorder.record_snapshot, body.path))


@router.post("/debug-launch", response_model=RecordResult)
async def debug_launch(body: LaunchRequest, recorder: ClientRecorder = Depends(get_recorder)):
    result = await asyncio.to_thread(
        recorder.record_debug_launch, body.launch_time, body.entry_point, body.attributes
    )
    return _check(result)


@router.post("/normal-launch", response_model=RecordResult)
async def normal_launch(body: LaunchRequest, recorder: ClientRecorder = Depends(get_recorder)):
    result = await asyncio.to_thread(
        recorder.record_normal_launch, body.launch_time, body.entry_point, body.attributes
    )
    return _check(result)


@router.post("/launch-end", response_model=RecordResult)
async def launch_end(body: LaunchEndRequest, recorder: ClientRecorder = Depends(get_recorder)):
    return _check(await asyncio.to_thread(recorder.record_launch_end, body.launch_time))


@router.get("", response_model=list[dict[str, Any]])
async def list_events(recorder: ClientRecorder = Depends(get_recorder)):
    """
    Returns every event recorded in the current session's log, marker first.
    Frames with a corrupt body are skipped.
    """
    try:
        return await asyncio.to_thread(recorder.gateway.read_events)
    except IOFailure as e:
        raise HTTPException(status_code=503, detail=str(e))
