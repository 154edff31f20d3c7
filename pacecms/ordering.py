# pacecms/ordering.py
"""
드래그 앤 드롭 순서 변경.

순서 변경은 항상 순열이다: 원소를 추가하거나 제거하지 않는다.
저장할 때는 움직인 행만이 아니라 모든 행의 order_index를 0부터 다시 매긴다.
"""


def array_move(items, old_index, new_index):
    """old_index의 원소를 빼서 new_index에 끼운 새 리스트 반환"""
    result = list(items)
    if old_index == new_index:
        return result
    moved = result.pop(old_index)
    result.insert(new_index, moved)
    return result


def _row_id(row):
    return row['id'] if isinstance(row, dict) else row.id


def index_of(rows, row_id):
    for index, row in enumerate(rows):
        if _row_id(row) == row_id:
            return index
    return -1


def move_item(rows, moved_id, target_id):
    """moved_id 행을 target_id 행이 있던 자리로 이동

    같은 ID이거나 어느 한쪽이 목록에 없으면 순서를 바꾸지 않는다.
    """
    if moved_id == target_id:
        return list(rows)
    old_index = index_of(rows, moved_id)
    new_index = index_of(rows, target_id)
    if old_index < 0 or new_index < 0:
        return list(rows)
    return array_move(rows, old_index, new_index)


def build_reorder_payload(rows):
    """현재 순서를 {items: [{id, orderIndex}]} 형태로"""
    return {
        'items': [
            {'id': _row_id(row), 'orderIndex': index}
            for index, row in enumerate(rows)
        ]
    }


def validate_reorder_items(items):
    """PATCH reorder 요청의 items 검증, (id, order_index) 목록 반환"""
    if not isinstance(items, list):
        raise ValueError('Invalid data')

    seen = set()
    pairs = []
    for item in items:
        if not isinstance(item, dict):
            raise ValueError('Invalid data')
        item_id = item.get('id')
        order_index = item.get('orderIndex')
        if not isinstance(item_id, str) or not item_id:
            raise ValueError('Invalid data: id')
        if isinstance(order_index, bool) or not isinstance(order_index, int) or order_index < 0:
            raise ValueError(f'Invalid data: orderIndex for {item_id}')
        if item_id in seen:
            raise ValueError(f'Invalid data: duplicate id {item_id}')
        seen.add(item_id)
        pairs.append((item_id, order_index))
    return pairs
