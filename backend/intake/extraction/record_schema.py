"""
Per-student record produced by the extraction pipeline, plus its JSON shape.
"""
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Union

Number = Union[int, float]

CONTEXT_SEPARATOR = '\n\n'


class RecordStatus(str, Enum):
    IDLE = 'idle'
    GENERATING = 'generating'
    COMPLETED = 'completed'
    ERROR = 'error'


@dataclass
class CriterionEntry:
    score: Number
    comment: str = ''

    def to_dict(self) -> Dict:
        return {'score': self.score, 'comment': self.comment}

    @classmethod
    def from_dict(cls, d: Dict) -> 'CriterionEntry':
        return cls(score=d['score'], comment=d.get('comment', ''))


@dataclass
class StudentRecord:
    name: str
    score: int = 0
    criteria_scores: Dict[str, CriterionEntry] = field(default_factory=dict)
    classroom_behaviour: str = ''
    learning_attitude: str = ''
    submission_quality: str = ''
    submission_punctuality: str = ''
    progress: str = ''
    personal_note: str = ''
    original_comments: str = ''
    generated_summary: str = ''
    status: RecordStatus = RecordStatus.IDLE
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'name': self.name,
            'score': self.score,
            'criteriaScores': {k: v.to_dict() for k, v in self.criteria_scores.items()},
            'classroomBehaviour': self.classroom_behaviour,
            'learningAttitude': self.learning_attitude,
            'submissionQuality': self.submission_quality,
            'submissionPunctuality': self.submission_punctuality,
            'progress': self.progress,
            'personalNote': self.personal_note,
            'originalComments': self.original_comments,
            'generatedSummary': self.generated_summary,
            'status': self.status.value,
        }

    @classmethod
    def from_dict(cls, d: Dict) -> 'StudentRecord':
        return cls(
            id=d['id'],
            name=d['name'],
            score=d.get('score', 0),
            criteria_scores={k: CriterionEntry.from_dict(v) for k, v in d.get('criteriaScores', {}).items()},
            classroom_behaviour=d.get('classroomBehaviour', ''),
            learning_attitude=d.get('learningAttitude', ''),
            submission_quality=d.get('submissionQuality', ''),
            submission_punctuality=d.get('submissionPunctuality', ''),
            progress=d.get('progress', ''),
            personal_note=d.get('personalNote', ''),
            original_comments=d.get('originalComments', ''),
            generated_summary=d.get('generatedSummary', ''),
            status=RecordStatus(d.get('status', 'idle')),
        )


def build_record(name: str, score: int, criteria_scores: Dict[str, CriterionEntry],
                 fixed_fields: Dict[str, str], context_lines: List[str]) -> StudentRecord:
    """Assemble a fresh record; `fixed_fields` is keyed by record attribute name."""
    return StudentRecord(
        name=name,
        score=score,
        criteria_scores=dict(criteria_scores),
        original_comments=CONTEXT_SEPARATOR.join(context_lines),
        **fixed_fields,
    )
