# Copyright 2026 Pennyworth Technologies, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Pydantic schemas for chart API responses."""

from pydantic import BaseModel
from typing import List, Literal, Optional


class NodeData(BaseModel):
    name: str
    totalValue: float
    value: Optional[float] = None
    children: List["NodeData"] = []


class TreeOutput(BaseModel):
    title: str
    totalSum: float
    levelCount: int
    root: NodeData


class LabelData(BaseModel):
    path: List[str]
    name: str
    depth: int
    text: str


class LabelsOutput(BaseModel):
    mode: Literal["category", "value", "percentage"]
    totalSum: float
    labels: List[LabelData]


NodeData.model_rebuild()
