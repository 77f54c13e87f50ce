import json

from intake.extraction import RecordStatus, RowExtractor, parse_grid
from intake.sheet_loader import to_row


def only(records):
    assert len(records) == 1
    return records[0]


def test_single_criterion():
    rec = only(parse_grid([['Name', 'A'], ['Alice', 8]]))
    assert rec.name == 'Alice'
    assert rec.score == 8
    assert rec.to_dict()['criteriaScores'] == {'A': {'score': 8, 'comment': ''}}
    assert rec.original_comments == 'Criterion A: 8'


def test_out_of_range_criterion_is_kept_but_not_averaged():
    rec = only(parse_grid([['Name', 'A', 'B'], ['Bob', 5, 15]]))
    assert rec.criteria_scores['A'].score == 5
    assert rec.criteria_scores['B'].score == 15
    assert rec.score == 5


def test_criterion_comment_is_paired_and_consumed():
    rec = only(parse_grid([['Name', 'A', 'A Comment'], ['Cara', 7, 'Great job']]))
    assert rec.criteria_scores['A'].score == 7
    assert rec.criteria_scores['A'].comment == 'Great job'
    assert rec.original_comments == 'Criterion A: 7 - Great job'
    assert 'A Comment:' not in rec.original_comments


def test_comment_paired_by_letter_in_label():
    rec = only(parse_grid([['Name', 'B', 'Notes for b'], ['Mo', 9, 'Neat']]))
    assert rec.criteria_scores['B'].comment == 'Neat'


def test_blank_comment_cell_is_not_paired():
    rec = only(parse_grid([['Name', 'A', 'A Comment', 'Feedback'], ['Nia', 6, None, 'Kind']]))
    assert rec.criteria_scores['A'].comment == ''
    assert rec.original_comments == 'Criterion A: 6\n\nFeedback: Kind'


def test_rows_without_names_are_dropped():
    records = parse_grid([
        ['Name', 'Score'],
        ['Ann', 6],
        [None, 9],
        ['', 4],
        ['   ', 3],
        [],
        ['Ben', 8],
    ])
    assert [r.name for r in records] == ['Ann', 'Ben']


def test_names_are_trimmed():
    rec = only(parse_grid([['Name'], ['  Cleo  ']]))
    assert rec.name == 'Cleo'


def test_average_rounds_half_up():
    rec = only(parse_grid([['Name', 'A', 'B'], ['Dee', 7, 8]]))
    assert rec.score == 8


def test_no_score_columns():
    rec = only(parse_grid([['Name', 'Feedback'], ['Eve', 'Lovely']]))
    assert rec.score == 0
    assert rec.criteria_scores == {}
    assert rec.original_comments == 'Feedback: Lovely'


def test_fixed_fields_and_context_order():
    rec = only(parse_grid([
        ['Student Name', 'Classroom Behaviour', 'Learning Attitude', 'Submission Quality',
         'Submission Punctuality', 'Progress', 'Personal Note'],
        ['Fay', 'Calm', 'Curious', 'Tidy', 'Always on time', 'Good', 'Loves chess'],
    ]))
    assert rec.classroom_behaviour == 'Calm'
    assert rec.learning_attitude == 'Curious'
    assert rec.submission_quality == 'Tidy'
    assert rec.submission_punctuality == 'Always on time'
    assert rec.progress == 'Good'
    assert rec.personal_note == 'Loves chess'
    assert rec.original_comments.split('\n\n') == [
        'Classroom Behaviour: Calm',
        'Learning Attitude: Curious',
        'Submission Quality: Tidy',
        'Submission Punctuality: Always on time',
        'Progress: Good',
        'Personal Note: Loves chess',
    ]


def test_first_matching_column_sets_fixed_field():
    rec = only(parse_grid([['Name', 'Progress', 'Progress'], ['Gil', 'Good', 'Better']]))
    assert rec.progress == 'Good'
    assert rec.original_comments == 'Progress: Good\n\nProgress: Better'


def test_numeric_fixed_field_is_stringified():
    rec = only(parse_grid([['Name', 'Progress'], ['Hugo', 4]]))
    assert rec.progress == '4'


def test_generic_scores_in_range_are_averaged():
    rec = only(parse_grid([['Name', 'Total', 'Q1'], ['Ida', 9, '6 marks']]))
    assert rec.score == 8
    assert rec.original_comments == 'Total: 9\n\nQ1: 6'


def test_numeric_noise_is_dropped():
    rec = only(parse_grid([['Name', 'Score', 'Attendance'], ['Jay', 45, 97]]))
    assert rec.score == 0
    assert rec.original_comments == ''


def test_unparseable_criterion_falls_back_to_free_text():
    rec = only(parse_grid([['Name', 'A'], ['Kit', 'Excellent']]))
    assert rec.criteria_scores == {}
    assert rec.score == 0
    assert rec.original_comments == 'A: Excellent'


def test_booleans_are_never_scores():
    rec = only(parse_grid([['Name', 'Submitted', 'Grade'], ['Lou', True, False]]))
    assert rec.score == 0
    assert rec.original_comments == 'Submitted: true\n\nGrade: false'


def test_unlabelled_columns_get_synthetic_labels():
    rec = only(parse_grid([['Name', 'A'], ['Lee', 6, 'extra words']]))
    assert rec.criteria_scores['A'].comment == ''
    assert rec.original_comments == 'Criterion A: 6\n\nColumn 2: extra words'


def test_name_column_found_by_label():
    rec = only(parse_grid([['ID', 'Name', 'A'], [101, 'Jo', 6]]))
    assert rec.name == 'Jo'
    assert rec.score == 6


def test_header_below_title_rows():
    rec = only(parse_grid([['Term 2 report'], [], ['Student', 'Mark'], ['Ivy', '7']]))
    assert rec.name == 'Ivy'
    assert rec.score == 7
    assert rec.original_comments == 'Mark: 7'


def test_new_records_start_idle():
    rec = only(parse_grid([['Name'], ['Max']]))
    assert rec.status is RecordStatus.IDLE
    assert rec.generated_summary == ''


def test_empty_grid():
    assert parse_grid([]) == []


def test_consumed_columns_do_not_leak_between_rows():
    labels = ['Name', 'A', 'A Comment']
    extractor = RowExtractor(labels, 0)
    first = extractor.extract(to_row(['Ona', 5, 'Good start']))
    second = extractor.extract(to_row(['Pip', 'absent', 'Off sick']))
    assert first.criteria_scores['A'].comment == 'Good start'
    assert second.criteria_scores == {}
    assert second.original_comments == 'A: absent\n\nA Comment: Off sick'


def test_thread_pool_keeps_row_order():
    grid = [['Name', 'A']] + [[f'Student {i}', i % 10 + 1] for i in range(50)]
    serial = parse_grid(grid)
    pooled = parse_grid(grid, max_workers=4)
    assert [r.name for r in pooled] == [r.name for r in serial]
    assert [r.score for r in pooled] == [r.score for r in serial]
    assert len({r.id for r in serial + pooled}) == 100


def test_non_finite_criterion_text_stays_free_text():
    rec = only(parse_grid([['Name', 'A'], ['Quin', 'Infinity']]))
    assert rec.criteria_scores == {}
    assert rec.original_comments == 'A: Infinity'
    json.dumps(rec.to_dict(), allow_nan=False)
