"""Fixed seed dataset written on first load."""

from __future__ import annotations

from typing import Any, Dict, List

from dentalcare.utils.passwords import hash_password

SEED_CREDENTIALS: List[Dict[str, Any]] = [
    {"id": "1", "role": "Admin", "email": "admin@entnt.in", "password": "admin123", "name": "Dr. Sarah Johnson"},
    {"id": "8", "role": "Admin", "email": "dr.rahul@gmail.com", "password": "dental123", "name": "Dr. Rahul Gupta"},
    {"id": "9", "role": "Admin", "email": "asifnaqvi64@gmail.com", "password": "dental123", "name": "Dr. Asif Naqvi"},
    {"id": "2", "role": "Patient", "email": "vikasgup074@gmail.com", "password": "patient123", "patientId": "p1", "name": "Vikas Gupta"},
    {"id": "3", "role": "Patient", "email": "jane@gmail.com", "password": "patient123", "patientId": "p2", "name": "Jane Smith"},
    {"id": "4", "role": "Patient", "email": "mike@gmail.com", "password": "patient123", "patientId": "p3", "name": "Mike Johnson"},
    {"id": "5", "role": "Patient", "email": "sarah@gmail.com", "password": "patient123", "patientId": "p4", "name": "Sarah Joseph"},
    {"id": "6", "role": "Patient", "email": "david@gmail.com", "password": "patient123", "patientId": "p5", "name": "David Brown"},
    {"id": "7", "role": "Patient", "email": "lisa@gmail.com", "password": "patient123", "patientId": "p6", "name": "Lisa Davis"},
    {"id": "10", "role": "Patient", "email": "robert@gmail.com", "password": "patient123", "patientId": "p7", "name": "Robert Miller"},
]

SEED_PATIENTS: List[Dict[str, Any]] = [
    {
        "id": "p1",
        "name": "Vikas Gupta",
        "dob": "1990-05-10",
        "contact": "1234567890",
        "healthInfo": "No allergies, regular smoker",
        "email": "vikasgup074@gmail.com",
        "address": "Kondapur, Hyderabad",
        "emergencyContact": "Vikas Gupta - 0987654321",
        "createdAt": "2024-01-15T10:00:00Z",
        "updatedAt": "2024-01-15T10:00:00Z",
    },
    {
        "id": "p2",
        "name": "Jane Smith",
        "dob": "1985-08-22",
        "contact": "2345678901",
        "healthInfo": "Allergic to penicillin, diabetes type 2",
        "email": "jane@entnt.in",
        "address": "456 Oak Ave, Another City, ST 67890",
        "emergencyContact": "John Smith - 1234567890",
        "createdAt": "2024-02-10T14:30:00Z",
        "updatedAt": "2024-02-10T14:30:00Z",
    },
    {
        "id": "p3",
        "name": "Mike Johnson",
        "dob": "1992-03-15",
        "contact": "3456789012",
        "healthInfo": "No known allergies, anxiety about dental procedures",
        "email": "mike@entnt.in",
        "address": "789 Pine Rd, Somewhere, ST 13579",
        "emergencyContact": "Lisa Johnson - 2468135790",
        "createdAt": "2024-03-05T09:15:00Z",
        "updatedAt": "2024-03-05T09:15:00Z",
    },
    {
        "id": "p4",
        "name": "Sarah Wilson",
        "dob": "1988-11-30",
        "contact": "4567890123",
        "healthInfo": "Allergic to latex, high blood pressure medication",
        "email": "sarah@entnt.in",
        "address": "321 Elm St, Elsewhere, ST 24680",
        "emergencyContact": "Tom Wilson - 3579246810",
        "createdAt": "2024-04-12T16:45:00Z",
        "updatedAt": "2024-04-12T16:45:00Z",
    },
    {
        "id": "p5",
        "name": "David Brown",
        "dob": "1995-07-08",
        "contact": "5678901234",
        "healthInfo": "No allergies, previous orthodontic treatment",
        "email": "david@entnt.in",
        "address": "654 Maple Ave, Nowhere, ST 97531",
        "emergencyContact": "Mary Brown - 4681357902",
        "createdAt": "2024-05-20T11:20:00Z",
        "updatedAt": "2024-05-20T11:20:00Z",
    },
    {
        "id": "p6",
        "name": "Lisa Davis",
        "dob": "1983-12-03",
        "contact": "6789012345",
        "healthInfo": "Allergic to ibuprofen, pregnant (2nd trimester)",
        "email": "lisa@entnt.in",
        "address": "987 Cedar Ln, Anywhere, ST 86420",
        "emergencyContact": "Mark Davis - 5792468013",
        "createdAt": "2024-06-08T13:10:00Z",
        "updatedAt": "2024-06-08T13:10:00Z",
    },
    {
        "id": "p7",
        "name": "Robert Miller",
        "dob": "1978-09-25",
        "contact": "7890123456",
        "healthInfo": "Heart condition, takes blood thinners, no known allergies",
        "email": "robert@entnt.in",
        "address": "147 Birch St, Everywhere, ST 75319",
        "emergencyContact": "Susan Miller - 6803579124",
        "createdAt": "2024-07-15T08:30:00Z",
        "updatedAt": "2024-07-15T08:30:00Z",
    },
]


def _incident(
    incident_id: str,
    patient_id: str,
    title: str,
    description: str,
    comments: str,
    appointment_date: str,
    status: str,
    created_at: str,
    updated_at: str,
    **extra: Any,
) -> Dict[str, Any]:
    record = {
        "id": incident_id,
        "patientId": patient_id,
        "title": title,
        "description": description,
        "comments": comments,
        "appointmentDate": appointment_date,
        "status": status,
        "files": [],
        "createdAt": created_at,
        "updatedAt": updated_at,
    }
    record.update(extra)
    return record


SEED_INCIDENTS: List[Dict[str, Any]] = [
    _incident(
        "i1", "p1", "Toothache", "Upper molar pain", "Sensitive to cold",
        "2025-01-15T10:00:00", "Completed",
        "2024-12-20T10:00:00Z", "2025-01-15T11:30:00Z",
        cost=80, treatment="Root canal therapy", nextAppointmentDate="2025-02-15T10:00:00",
    ),
    _incident(
        "i2", "p1", "Dental Cleaning", "Regular dental cleaning and checkup", "Good oral hygiene",
        "2025-01-20T14:30:00", "Scheduled",
        "2024-12-15T14:30:00Z", "2024-12-15T14:30:00Z",
    ),
    _incident(
        "i3", "p2", "Cavity Filling", "Small cavity in lower left molar", "Patient reports mild discomfort",
        "2025-01-18T09:00:00", "Completed",
        "2024-12-10T09:00:00Z", "2025-01-18T10:15:00Z",
        cost=120, treatment="Composite filling",
    ),
    _incident(
        "i4", "p2", "Crown Preparation", "Preparation for dental crown on upper right premolar",
        "Temporary crown placed",
        "2025-01-22T11:00:00", "Completed",
        "2024-12-18T11:00:00Z", "2025-01-22T12:30:00Z",
        cost=450, treatment="Crown preparation and temporary placement",
        nextAppointmentDate="2025-02-05T11:00:00",
    ),
    _incident(
        "i5", "p3", "Wisdom Tooth Extraction", "Impacted wisdom tooth removal",
        "Patient very anxious, sedation recommended",
        "2025-01-25T15:00:00", "Scheduled",
        "2024-12-22T15:00:00Z", "2024-12-22T15:00:00Z",
    ),
    _incident(
        "i6", "p3", "Routine Checkup", "6-month routine dental examination", "No issues found, good oral health",
        "2024-12-10T10:30:00", "Completed",
        "2024-11-15T10:30:00Z", "2024-12-10T11:45:00Z",
        cost=75, treatment="Routine examination and cleaning",
    ),
    _incident(
        "i7", "p4", "Teeth Whitening", "Professional teeth whitening treatment",
        "Patient wants brighter smile for wedding",
        "2025-01-28T13:00:00", "Scheduled",
        "2024-12-25T13:00:00Z", "2024-12-25T13:00:00Z",
    ),
    _incident(
        "i8", "p4", "Gum Treatment", "Periodontal therapy for gum disease",
        "Mild gingivitis, improved with treatment",
        "2024-11-20T14:00:00", "Completed",
        "2024-10-25T14:00:00Z", "2024-11-20T15:30:00Z",
        cost=200, treatment="Deep cleaning and scaling", nextAppointmentDate="2025-02-20T14:00:00",
    ),
    _incident(
        "i9", "p5", "Retainer Check", "Post-orthodontic retainer adjustment",
        "Retainer fits well, minor adjustment needed",
        "2025-02-01T16:00:00", "Scheduled",
        "2024-12-28T16:00:00Z", "2024-12-28T16:00:00Z",
    ),
    _incident(
        "i10", "p5", "Dental Cleaning", "Regular cleaning and checkup", "Excellent oral hygiene post-braces",
        "2024-10-15T09:30:00", "Completed",
        "2024-09-20T09:30:00Z", "2024-10-15T10:45:00Z",
        cost=85, treatment="Professional cleaning and fluoride treatment",
    ),
    _incident(
        "i11", "p6", "Pregnancy Dental Care", "Prenatal dental examination", "Safe procedures only due to pregnancy",
        "2025-02-03T10:00:00", "Scheduled",
        "2024-12-30T10:00:00Z", "2024-12-30T10:00:00Z",
    ),
    _incident(
        "i12", "p6", "Emergency Visit", "Broken filling during pregnancy",
        "Temporary filling placed, permanent after delivery",
        "2024-09-12T12:00:00", "Completed",
        "2024-09-12T11:30:00Z", "2024-09-12T13:15:00Z",
        cost=95, treatment="Temporary filling replacement",
    ),
    _incident(
        "i13", "p7", "Bridge Consultation", "Consultation for dental bridge replacement",
        "Old bridge needs replacement, heart condition noted",
        "2025-02-05T14:30:00", "Scheduled",
        "2025-01-02T14:30:00Z", "2025-01-02T14:30:00Z",
    ),
    _incident(
        "i14", "p7", "Routine Checkup", "Regular examination with cardiac precautions",
        "Coordinated with cardiologist, no issues found",
        "2024-08-20T11:00:00", "Completed",
        "2024-07-25T11:00:00Z", "2024-08-20T12:30:00Z",
        cost=90, treatment="Examination and gentle cleaning", nextAppointmentDate="2025-02-20T11:00:00",
    ),
]


def seed_users() -> List[Dict[str, Any]]:
    """Return the seed user documents with freshly salted password hashes."""

    documents: List[Dict[str, Any]] = []
    for credential in SEED_CREDENTIALS:
        document = {key: value for key, value in credential.items() if key != "password"}
        document["passwordHash"] = hash_password(credential["password"])
        documents.append(document)
    return documents
