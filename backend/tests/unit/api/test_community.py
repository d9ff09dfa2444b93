"""
Unit Tests for Events, News, Forums, Gallery and Board Minutes
"""
import pytest
from httpx import AsyncClient

from tests.conftest import create_user, headers_for


class TestEvents:

    @pytest.mark.asyncio
    async def test_create_event_stamps_creator(self, client: AsyncClient, test_user, auth_headers):
        response = await client.post('/api/events', headers=auth_headers, json={
            'title': 'Homecoming 2025',
            'description': 'Annual reunion',
            'date': '2025-12-20T15:00:00',
            'location': 'School Hall',
        })

        assert response.status_code == 200
        data = response.json()
        assert data['title'] == 'Homecoming 2025'
        assert data['creatorId'] == test_user.id
        assert data['creator'] == {'id': test_user.id, 'name': test_user.name}

    @pytest.mark.asyncio
    async def test_list_events_newest_first_and_public(self, client: AsyncClient, auth_headers):
        for title, date in [('Old', '2020-01-01T10:00:00'), ('New', '2026-01-01T10:00:00'), ('Mid', '2023-06-01T10:00:00')]:
            await client.post('/api/events', headers=auth_headers, json={'title': title, 'date': date})

        response = await client.get('/api/events')

        assert response.status_code == 200
        assert [e['title'] for e in response.json()] == ['New', 'Mid', 'Old']
        assert all(e['creator']['name'] for e in response.json())

    @pytest.mark.asyncio
    async def test_undated_events_listed_last(self, client: AsyncClient, auth_headers):
        await client.post('/api/events', headers=auth_headers, json={'title': 'TBD'})
        await client.post('/api/events', headers=auth_headers, json={'title': 'Dated', 'date': '2024-05-01T10:00:00'})

        response = await client.get('/api/events')

        assert [e['title'] for e in response.json()] == ['Dated', 'TBD']

    @pytest.mark.asyncio
    async def test_create_event_requires_auth(self, client: AsyncClient):
        response = await client.post('/api/events', json={'title': 'x'})

        assert response.status_code == 401


class TestNews:

    @pytest.mark.asyncio
    async def test_admin_posts_news(self, client: AsyncClient, admin_user, admin_auth_headers):
        response = await client.post('/api/news', headers=admin_auth_headers, json={
            'title': 'New library wing',
            'content': 'Funded by the class of 1995.',
        })

        assert response.status_code == 200
        data = response.json()
        assert data['author'] == {'id': admin_user.id, 'name': admin_user.name}
        assert data['date']

        listing = await client.get('/api/news')
        assert [n['title'] for n in listing.json()] == ['New library wing']

    @pytest.mark.asyncio
    async def test_alumni_cannot_post_news(self, client: AsyncClient, auth_headers):
        response = await client.post('/api/news', headers=auth_headers, json={'title': 'x'})

        assert response.status_code == 403


class TestForums:

    @pytest.mark.asyncio
    async def test_create_thread(self, client: AsyncClient, test_user, auth_headers):
        response = await client.post('/api/forums', headers=auth_headers, json={
            'title': 'Who still has the 2008 yearbook?',
            'content': 'Looking for scans.',
        })

        assert response.status_code == 200
        data = response.json()
        assert data['author']['id'] == test_user.id
        assert data['replies'] == []

    @pytest.mark.asyncio
    async def test_replies_kept_in_append_order(self, client: AsyncClient, db_session, test_user, auth_headers):
        other = await create_user(db_session)
        thread = (await client.post('/api/forums', headers=auth_headers, json={'title': 't'})).json()

        first = await client.post(f"/api/forums/{thread['id']}/reply", headers=auth_headers, json={'content': 'first'})
        second = await client.post(
            f"/api/forums/{thread['id']}/reply", headers=headers_for(other), json={'content': 'second'}
        )

        assert first.status_code == 200
        assert second.status_code == 200
        replies = second.json()['replies']
        assert [r['content'] for r in replies] == ['first', 'second']
        assert [r['author']['id'] for r in replies] == [test_user.id, other.id]

        listing = await client.get('/api/forums')
        assert [r['content'] for r in listing.json()[0]['replies']] == ['first', 'second']

    @pytest.mark.asyncio
    async def test_reply_to_unknown_thread(self, client: AsyncClient, auth_headers):
        response = await client.post(
            '/api/forums/00000000-0000-0000-0000-000000000000/reply',
            headers=auth_headers,
            json={'content': 'hello?'},
        )

        assert response.status_code == 404
        assert response.json() == {'msg': 'Thread not found'}


class TestGallery:

    @pytest.mark.asyncio
    async def test_upload_image(self, client: AsyncClient, test_user, auth_headers, storage):
        response = await client.post(
            '/api/gallery',
            headers=auth_headers,
            data={'caption': 'Sports day 2004'},
            files={'image': ('sports.jpg', b'jpegbytes', 'image/jpeg')},
        )

        assert response.status_code == 200
        data = response.json()
        assert data['url'] == 'https://cdn.test/kghs/gallery/1-sports.jpg'
        assert data['caption'] == 'Sports day 2004'
        assert data['uploader'] == {'id': test_user.id, 'name': test_user.name}
        assert storage.uploads[0]['data'] == b'jpegbytes'

        listing = await client.get('/api/gallery')
        assert [g['caption'] for g in listing.json()] == ['Sports day 2004']

    @pytest.mark.asyncio
    async def test_image_required(self, client: AsyncClient, auth_headers, storage):
        response = await client.post('/api/gallery', headers=auth_headers, data={'caption': 'no file'})

        assert response.status_code == 400
        assert response.json() == {'msg': 'Image file is required'}
        assert storage.uploads == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize('filename, content_type', [
        ('reunion.heic', 'image/heic'),
        ('anthem.mp4', 'video/mp4'),
    ])
    async def test_accepts_other_media_types(self, client: AsyncClient, auth_headers, storage, filename, content_type):
        response = await client.post(
            '/api/gallery',
            headers=auth_headers,
            files={'image': (filename, b'bytes', content_type)},
        )

        assert response.status_code == 200
        assert storage.uploads[0]['content_type'] == content_type

    @pytest.mark.asyncio
    async def test_rejects_non_media_file(self, client: AsyncClient, auth_headers, storage):
        response = await client.post(
            '/api/gallery',
            headers=auth_headers,
            files={'image': ('notes.txt', b'hello', 'text/plain')},
        )

        assert response.status_code == 400
        assert storage.uploads == []


class TestBoardMinutes:

    @pytest.mark.asyncio
    async def test_admin_uploads_pdf(self, client: AsyncClient, admin_auth_headers, auth_headers, storage):
        response = await client.post(
            '/api/board-minutes',
            headers=admin_auth_headers,
            data={'title': 'AGM March'},
            files={'file': ('agm.pdf', b'%PDF-1.4', 'application/pdf')},
        )

        assert response.status_code == 200
        assert response.json()['title'] == 'AGM March'
        assert response.json()['fileUrl'] == 'https://cdn.test/kghs/board-minutes/1-agm.pdf'

        listing = await client.get('/api/board-minutes', headers=auth_headers)
        assert listing.status_code == 200
        assert [m['title'] for m in listing.json()] == ['AGM March']

    @pytest.mark.asyncio
    async def test_file_required(self, client: AsyncClient, admin_auth_headers):
        response = await client.post('/api/board-minutes', headers=admin_auth_headers, data={'title': 'AGM'})

        assert response.status_code == 400
        assert response.json() == {'msg': 'PDF file is required'}

    @pytest.mark.asyncio
    async def test_title_required(self, client: AsyncClient, admin_auth_headers, storage):
        response = await client.post(
            '/api/board-minutes',
            headers=admin_auth_headers,
            files={'file': ('agm.pdf', b'%PDF-1.4', 'application/pdf')},
        )

        assert response.status_code == 400
        assert response.json() == {'msg': 'Title is required'}
        assert storage.uploads == []

    @pytest.mark.asyncio
    async def test_non_pdf_rejected(self, client: AsyncClient, admin_auth_headers, storage):
        response = await client.post(
            '/api/board-minutes',
            headers=admin_auth_headers,
            data={'title': 'AGM'},
            files={'file': ('agm.docx', b'PK', 'application/vnd.openxmlformats-officedocument.wordprocessingml.document')},
        )

        assert response.status_code == 400
        assert storage.uploads == []

    @pytest.mark.asyncio
    async def test_alumni_cannot_upload(self, client: AsyncClient, auth_headers):
        response = await client.post(
            '/api/board-minutes',
            headers=auth_headers,
            data={'title': 'AGM'},
            files={'file': ('agm.pdf', b'%PDF-1.4', 'application/pdf')},
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_listing_requires_auth(self, client: AsyncClient):
        response = await client.get('/api/board-minutes')

        assert response.status_code == 401
