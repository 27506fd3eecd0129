"""
Centres and clubs directory (display-only, not backed by the API)
"""

from models import Club

CENTRE_FILTERS = [
    'All', 'Research', 'Academic', 'Cultural', 'Student support',
    'Innovation', 'Social', 'Leadership', 'Sports',
]

# filter name -> centre titles shown under it
FILTER_MEMBERS = {
    'Research': ['CNRI', 'CAI', 'CARD'],
    'Academic': ['CAPS', 'CEDRIC', 'TLEC'],
    'Cultural': ['CCD', 'VWCN'],
    'Student support': ['CCHS', 'CAPS'],
    'Innovation': ['CAI', 'CCD', 'SDG Cell'],
}

_IMAGE_BASE = 'https://img.recraft.ai'

CENTRES = [
    Club(
        id=1,
        title='CNRI',
        subtitle='Centre for Neurodiversity Research and Innovation',
        description=(
            'Enhances understanding and support for neurodiverse individuals by fostering research and '
            'innovation, creating inclusive environments, and advancing societal awareness and acceptance.'
        ),
        image=f'{_IMAGE_BASE}/Zt49_qX8AzcI6jLJHYYoNAMb0w92XOMOgNZEBWV0NnE/rs:fit:2048:1024:0/q:95/g:no/plain/abs://prod/images/63d79516-7e3d-4f1f-a4cb-d71689f0f093@jpg',
    ),
    Club(
        id=2,
        title='CAPS',
        subtitle='Centre for Academic and Professional Support',
        description=(
            "Provides academic and professional training, resources, and talks designed to support students' "
            'academic excellence and career development with workshops on various skills.'
        ),
        image=f'{_IMAGE_BASE}/DXVis5aciXPl_SpXpocvUcec6eLxmTogWC4mTJ-vDOY/rs:fit:2048:1024:0/q:95/g:no/plain/abs://prod/images/18ca971b-fabe-4b20-8fbf-9cdd1528e714@jpg',
    ),
    Club(
        id=3,
        title='CAI',
        subtitle='Centre for Artificial Intelligence',
        description=(
            'Dedicated to advancing education, research, and innovation in artificial intelligence, focusing '
            'on practical applications of AI technologies in industries and academia.'
        ),
        image=f'{_IMAGE_BASE}/fZsh_b0fzcNaVdNLipdxoIPA-pj0NIm_SRLcnRapWRI/rs:fit:2048:1024:0/q:95/g:no/plain/abs://prod/images/76d78cf4-c7a2-479c-bd3d-d46d88cd63b3@jpg',
    ),
    Club(
        id=4,
        title='CCD',
        subtitle='Centre for Concept Design',
        description=(
            'Emphasizes effective communication through media, content, and digital services, nurturing '
            'creativity and providing tools to conceptualize and design innovative digital media projects.'
        ),
        image=f'{_IMAGE_BASE}/zCoCzcmjv-7SID6sArhcETovDTS5jyo05awt9n8i0c8/rs:fit:2048:1024:0/q:95/g:no/plain/abs://prod/images/d59bffa0-a47d-4f61-a8e1-5464719b5913@jpg',
    ),
    Club(
        id=5,
        title='CCHS',
        subtitle='Centre for Counselling and Health Services',
        description=(
            'Offers services to support mental and physical well-being of students including counseling '
            'sessions, mental health awareness programs, and professional health support.'
        ),
        image=f'{_IMAGE_BASE}/4PxhBChjdcjpDJSENE1SEt-5OVrHeTtUaTPlRgUKL0A/rs:fit:2048:1024:0/q:95/g:no/plain/abs://prod/images/bdd80302-62f6-478e-a598-dda7eaf5f46f@jpg',
    ),
    Club(
        id=6,
        title='SDG Cell',
        subtitle='Sustainable Development Goal Cell',
        description=(
            "Committed to integrating UN Sustainable Development Goals into the university's framework "
            'through research, education, and community engagement initiatives.'
        ),
        image=f'{_IMAGE_BASE}/j8wS9gYWtLzTM61OIZ-hh8kHVDv3_hGRBQIvl8YVe1A/rs:fit:2048:1024:0/q:95/g:no/plain/abs://prod/images/f8478bc3-8c33-4344-b64a-27a521778253@jpg',
    ),
]

CLUB_DETAILS = {
    1: Club(
        id=1,
        title='Technology Innovation Club',
        description=(
            'A student-led organization focused on fostering technological innovation and entrepreneurship '
            'among university students. The club provides a platform for students to explore emerging '
            'technologies, develop technical skills, and collaborate on innovative projects.'
        ),
        categories=['Innovation', 'Technology', 'Academic'],
        mission=(
            'To create a vibrant community of innovators who leverage technology to solve real-world '
            'problems and drive positive change in society.'
        ),
        vision=(
            'Empowering students to become technological leaders and innovators who will shape the future '
            'of technology and entrepreneurship.'
        ),
        activities=[
            'Weekly tech workshops and hands-on training sessions',
            'Hackathons and coding competitions',
            'Industry expert guest lectures and networking events',
            'Collaborative projects with industry partners',
            'Annual tech symposium and innovation showcase',
        ],
        leaders=[
            {'name': 'Sarah Johnson', 'role': 'President'},
            {'name': 'Michael Chen', 'role': 'Vice President'},
            {'name': 'Jessica Patel', 'role': 'Technical Lead'},
        ],
        contact_info={
            'email': 'tech.innovation@university.edu',
            'instagram': 'tech_innovation_club',
            'website': 'https://techinnovationclub.university.edu',
        },
        meeting_schedule='Every Wednesday at 5:00 PM in the Innovation Lab (Room 302, Technology Building)',
        join_process=(
            'Interested students can join by filling out the membership form on our website or by attending '
            'our introductory meeting at the beginning of each semester. No prior technical experience required!'
        ),
        cover_image=f'{_IMAGE_BASE}/fZsh_b0fzcNaVdNLipdxoIPA-pj0NIm_SRLcnRapWRI/rs:fit:2048:1024:0/q:95/g:no/plain/abs://prod/images/76d78cf4-c7a2-479c-bd3d-d46d88cd63b3@jpg',
    ),
}


def filter_centres(filter_name):
    """Centres shown under a filter tab; unknown or 'All' shows everything"""
    if not filter_name or filter_name == 'All' or filter_name not in CENTRE_FILTERS:
        return list(CENTRES)
    members = FILTER_MEMBERS.get(filter_name, [])
    return [centre for centre in CENTRES if centre.title in members]


def find_club(club_id):
    """Full club record, falling back to the centre card; None if unknown"""
    if club_id in CLUB_DETAILS:
        return CLUB_DETAILS[club_id]
    for centre in CENTRES:
        if centre.id == club_id:
            return centre
    return None
