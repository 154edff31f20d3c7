# pacecms/aggregation.py

from collections import Counter
import logging

from pacecms.config import FAVORITES_COLLECTION, ORDER_ITEMS_COLLECTION, REVIEWS_COLLECTION
from pacecms.database import query_documents

logger = logging.getLogger(__name__)


def count_favorites(item_type):
    """item_id별 찜 개수"""
    counts = Counter()
    for fav in query_documents(FAVORITES_COLLECTION, 'item_type', item_type):
        counts[fav.get('item_id')] += 1
    return counts


def count_purchases(item_type, completed_only=False):
    """item_id별 구매 수량 합계"""
    counts = Counter()
    for item in query_documents(ORDER_ITEMS_COLLECTION, 'item_type', item_type):
        if completed_only and item.get('order_status') != 'COMPLETED':
            continue
        counts[item.get('item_id')] += int(item.get('quantity', 1) or 0)
    return counts


def item_stats(item_type, completed_only=False):
    """(찜, 구매) 카운터 쌍"""
    return count_favorites(item_type), count_purchases(item_type, completed_only)


def review_summary(course_id):
    """강의 리뷰 개수/평균 평점"""
    reviews = query_documents(REVIEWS_COLLECTION, 'course_id', course_id)
    ratings = [r['rating'] for r in reviews if isinstance(r.get('rating'), (int, float))]
    average = round(sum(ratings) / len(ratings), 1) if ratings else 0
    reviews.sort(key=lambda r: r.get('created_at') or '', reverse=True)
    return {
        'count': len(reviews),
        'averageRating': average,
        'reviews': [
            {
                'id': r['id'],
                'rating': r.get('rating'),
                'content': r.get('content', ''),
                'userName': r.get('user_name', ''),
                'createdAt': r.get('created_at', '')
            }
            for r in reviews
        ]
    }
