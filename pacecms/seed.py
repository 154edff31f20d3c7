# pacecms/seed.py
"""목업 데이터 생성 (강사, 강의, 전자책, 워크숍, 메인 비주얼, 찜, 주문, 리뷰)"""

import logging
import random
import uuid
from datetime import date, timedelta

from pacecms.config import (
    COLLECTIONS, COURSE_CATEGORIES, DOCUMENT_CATEGORIES, FAVORITES_COLLECTION,
    INSTRUCTORS_COLLECTION, ORDER_ITEMS_COLLECTION, REVIEWS_COLLECTION,
    WORKSHOP_CATEGORIES, WORKSHOP_STATUSES
)
from pacecms.courses import TARGET_AUDIENCE_MAPPING
from pacecms.database import batch_delete, create_document, get_db

logger = logging.getLogger(__name__)

COURSE_TITLE = 'From Differentiated Resumes to Confident Interviews'
COURSE_DESC = ('Learn how recruiters evaluate resumes and interviews, based on real hiring '
               'examples from Canadian companies.')
COURSE_THUMBNAILS = ['/img/course_image1.png', '/img/course_image2.png', '/img/course_image3.png']
SECTION_TITLES = [
    'Case Studies of North American Developer Job Postings',
    'Analysis of North American Developer Job Postings',
    'Actual Successful Resumes for North American Developer Jobs'
]
INSTRUCTORS = [
    {
        'name': 'Raphael. Lee',
        'profile_image': '/img/instructor-image.png',
        'description': 'Managing multicultural teams for over 19 years.',
        'careers': [
            {'period': '2019 ~', 'position': 'Managing Director at Pacemaker'},
            {'period': '2015 ~ 2019', 'position': 'Director of Operations at Metanet'}
        ]
    },
    {
        'name': 'Sarah Kim',
        'profile_image': '/img/instructor-image.png',
        'description': 'Expert in resume writing and career consulting with over 10 years of experience.',
        'careers': [
            {'period': '2020 ~', 'position': 'Career Consultant'},
            {'period': '2015 ~ 2020', 'position': 'HR Manager at Tech Corp'}
        ]
    }
]
REVIEW_TEXTS = [
    'Very practical, I rewrote my resume the same day.',
    'The interview section was exactly what I needed.',
    'Good examples from real hiring processes.',
    'A bit short but worth it.'
]

SEEDED_COLLECTIONS = list(COLLECTIONS.values()) + [
    INSTRUCTORS_COLLECTION, FAVORITES_COLLECTION, ORDER_ITEMS_COLLECTION, REVIEWS_COLLECTION
]


def wipe_collections():
    """시드 대상 컬렉션 비우기"""
    for collection in SEEDED_COLLECTIONS:
        ids = [doc.id for doc in get_db().collection(collection).stream()]
        if ids:
            batch_delete(collection, ids)
        logger.info(f"🧹 {collection}: {len(ids)}건 삭제")


def _seed_courses(rng, instructor_ids):
    ids = []
    for i in range(6):
        audiences = rng.sample(sorted(TARGET_AUDIENCE_MAPPING), 3)
        ids.append(create_document(COLLECTIONS['courses'], {
            'title': COURSE_TITLE,
            'course_title': COURSE_TITLE,
            'description': COURSE_DESC,
            'price': rng.choice([0, 49, 99, 149]),
            'category': COURSE_CATEGORIES[i % len(COURSE_CATEGORIES)],
            'is_public': rng.random() < 0.8,
            'thumbnail': COURSE_THUMBNAILS[i % len(COURSE_THUMBNAILS)],
            'target_audience_types': audiences,
            'sections': [
                {'title': title, 'items': [], 'order_index': index}
                for index, title in enumerate(SECTION_TITLES)
            ],
            'instructor_id': rng.choice(instructor_ids),
            'order_index': i
        }))
    return ids


def _seed_ebooks(rng):
    ids = []
    categories = sorted(DOCUMENT_CATEGORIES)
    for i in range(4):
        ids.append(create_document(COLLECTIONS['ebooks'], {
            'title': f'Career Playbook Vol.{i + 1}',
            'description': 'A step-by-step guide for job seekers in North America.',
            'category': rng.choice(categories),
            'is_public': True,
            'is_main': i == 0,
            'price': rng.choice([9, 19, 29]),
            'thumbnail': COURSE_THUMBNAILS[i % len(COURSE_THUMBNAILS)],
            'bucket_url': '',
            'target_audience_types': rng.sample(sorted(TARGET_AUDIENCE_MAPPING), 2),
            'table_of_contents': [{'title': title, 'content': COURSE_DESC} for title in SECTION_TITLES],
            'recommended_links': [],
            'order_index': i
        }))
    return ids


def _seed_workshops(rng):
    ids = []
    today = date.today()
    for i in range(3):
        start = today + timedelta(days=rng.randint(-10, 30))
        ids.append(create_document(COLLECTIONS['workshops'], {
            'title': f'Networking Night #{i + 1}',
            'description': 'Meet recruiters and practice your pitch.',
            'price': rng.choice([0, 25, 40]),
            'category': rng.choice(WORKSHOP_CATEGORIES),
            'status': rng.choice(WORKSHOP_STATUSES),
            'start_date': start.isoformat(),
            'end_date': (start + timedelta(days=rng.randint(0, 3))).isoformat(),
            'location_or_url': 'https://meet.example.com/pacemaker',
            'order_index': i
        }))
    return ids


def _seed_main_visuals(rng):
    today = date.today()
    slides = [
        ('Build the skills to launch your career abroad.', 'Explore programs', '/courses'),
        ('Ready to take the next step?', 'See workshops', '/workshops'),
        ('Your future career starts here.', 'Get Started', '/courses'),
    ]
    ids = []
    for i, (title, link_name, link) in enumerate(slides):
        ids.append(create_document(COLLECTIONS['main-visual'], {
            'title': title,
            'description': 'Begin your career journey in the U.S. & Canada with Pacemaker.',
            'is_public': True,
            'start_date': (today - timedelta(days=rng.randint(0, 7))).isoformat(),
            'end_date': (today + timedelta(days=rng.randint(7, 60))).isoformat(),
            'start_time': '00:00',
            'end_time': '23:59',
            'thumbnail': '',
            'link': link,
            'link_name': link_name,
            'order_index': i
        }))
    return ids


def _seed_activity(rng, item_type, item_ids):
    favorites = purchases = 0
    for item_id in item_ids:
        for _ in range(rng.randint(0, 12)):
            create_document(FAVORITES_COLLECTION, {
                'item_id': item_id, 'item_type': item_type, 'user_id': uuid.uuid4().hex
            })
            favorites += 1
        for _ in range(rng.randint(0, 8)):
            create_document(ORDER_ITEMS_COLLECTION, {
                'item_id': item_id,
                'item_type': item_type,
                'quantity': 1,
                'order_status': rng.choice(['COMPLETED', 'COMPLETED', 'PENDING'])
            })
            purchases += 1
    return favorites, purchases


def run_seed(wipe=False, random_seed=None):
    """시드 데이터 생성 후 건수 요약 반환"""
    rng = random.Random(random_seed)
    if wipe:
        wipe_collections()

    logger.info("🚀 새로운 시드 생성 시작…")
    instructor_ids = [create_document(INSTRUCTORS_COLLECTION, dict(data)) for data in INSTRUCTORS]
    course_ids = _seed_courses(rng, instructor_ids)
    ebook_ids = _seed_ebooks(rng)
    workshop_ids = _seed_workshops(rng)
    visual_ids = _seed_main_visuals(rng)

    favorites = purchases = 0
    for item_type, ids in (('COURSE', course_ids), ('EBOOK', ebook_ids), ('WORKSHOP', workshop_ids)):
        f, p = _seed_activity(rng, item_type, ids)
        favorites += f
        purchases += p

    reviews = 0
    for course_id in course_ids:
        for _ in range(rng.randint(1, 4)):
            create_document(REVIEWS_COLLECTION, {
                'course_id': course_id,
                'rating': rng.randint(3, 5),
                'content': rng.choice(REVIEW_TEXTS),
                'user_name': f'learner{rng.randint(1, 999)}'
            })
            reviews += 1

    summary = {
        'instructors': len(instructor_ids),
        'courses': len(course_ids),
        'ebooks': len(ebook_ids),
        'workshops': len(workshop_ids),
        'main_visuals': len(visual_ids),
        'favorites': favorites,
        'order_items': purchases,
        'reviews': reviews
    }
    logger.info(f"✅ 시드 생성 완료: {summary}")
    return summary
