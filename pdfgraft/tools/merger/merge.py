"""Plugins exposing PDF merge and inspection through the registry."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping

from ...core.utils import get_logger
from ...merge.exceptions import PdfMergeError
from ...merge.info import DocumentInfo, get_document_info
from ...merge.merger import MergeResult, PdfMerger
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = get_logger("pdfgraft.tools.merge")


@register_tool("merge")
class MergeTool(BaseTool):
    name = "merge"

    def run(self) -> Path:
        context = self.context
        inputs: Iterable[str | Path] | None = context.config.get("inputs")
        if inputs is None:
            if context.input_path is None:
                raise PdfMergeError("No input PDFs provided")
            inputs = [context.input_path]

        output = context.output_path
        if output is None:
            raise PdfMergeError("Merge tool requires an output path")

        metadata = context.config.get("metadata", True)
        document_info: Mapping[str, object] | None = context.config.get("document_info")
        password: str | None = context.config.get("password")

        inputs_list = list(inputs)
        LOGGER.debug("Merging %d input(s) into %s", len(inputs_list), output)
        merger = PdfMerger(logger=LOGGER)
        result: MergeResult = merger.merge(
            output,
            inputs_list,
            metadata=metadata,
            document_info=document_info,
            password=password,
        )
        context.resources["result"] = result
        return result.output


@register_tool("info")
class InfoTool(BaseTool):
    name = "info"

    def run(self) -> DocumentInfo:
        context = self.context
        if context.input_path is None:
            raise PdfMergeError("Info tool requires an input path")
        info = get_document_info(context.input_path, password=context.config.get("password"))
        context.resources["info"] = info
        return info
