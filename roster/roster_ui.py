import streamlit as st

from roster.models import AuthSession, StudentRecord
from roster.services.credential_service import CredentialForm
from roster.services.grouping import class_name, roster_summary_frame
from roster.services.roster_service import RosterView
from roster.auth_ui import render_account_bar
from roster.utils.ui_components import render_class_title, render_status

LOADING_CLASSES = "Loading classes..."


def _class_options(roster: RosterView):
    """Selectbox options plus a label lookup; a placeholder while classes are missing."""
    if not roster.classes:
        return [""], lambda _: LOADING_CLASSES
    labels = {c.id: c.name for c in roster.classes}
    return list(labels.keys()), lambda cid: labels.get(cid, str(cid))


def _index_of(options, value) -> int:
    try:
        return options.index(value)
    except ValueError:
        return 0


# -------------------------------------------
# ADD STUDENT
# -------------------------------------------

def render_add_student_form(roster: RosterView):
    st.markdown("### Add New Student")
    options, label = _class_options(roster)
    rev = roster.draft_revision

    with st.form("add_student_form"):
        c1, c2 = st.columns(2)
        with c1:
            name = st.text_input("Name", value=roster.new_draft.name, key=f"new_name_{rev}")
        with c2:
            email = st.text_input("Email", value=roster.new_draft.email, key=f"new_email_{rev}")
        class_id = st.selectbox(
            "Class",
            options,
            index=_index_of(options, roster.new_draft.class_id),
            format_func=label,
            key="new_class_id",
        )
        submitted = st.form_submit_button("Add Student", type="primary", disabled=roster.loading)

    if submitted:
        roster.add_student(name, email, class_id)
        st.rerun()


# -------------------------------------------
# DELETE CONFIRMATION
# -------------------------------------------

def render_delete_confirmation(roster: RosterView):
    target = roster.delete_target
    if target is None:
        return

    with st.container(border=True):
        st.markdown("#### Confirm Deletion")
        st.warning(f'Are you sure you want to delete student "{target.name}"?')
        col_yes, col_no = st.columns(2)
        with col_yes:
            if st.button("Yes, Delete", type="primary", key="confirm_delete_btn", disabled=roster.loading):
                roster.delete_confirmed()
                st.rerun()
        with col_no:
            if st.button("Cancel", key="cancel_delete_btn"):
                roster.cancel_delete()
                st.rerun()


# -------------------------------------------
# STUDENT ROWS
# -------------------------------------------

def render_edit_form(roster: RosterView, student: StudentRecord):
    draft = roster.edit_draft
    options, label = _class_options(roster)

    with st.form(f"edit_student_{student.id}"):
        st.markdown("**Edit Student**")
        name = st.text_input("Name", value=draft.name, key=f"edit_name_{student.id}")
        email = st.text_input("Email", value=draft.email, key=f"edit_email_{student.id}")
        class_id = st.selectbox(
            "Class",
            options,
            index=_index_of(options, draft.class_id),
            format_func=label,
            key=f"edit_class_{student.id}",
        )
        col_save, col_cancel = st.columns(2)
        with col_save:
            save = st.form_submit_button("Save", type="primary", disabled=roster.loading)
        with col_cancel:
            cancel = st.form_submit_button("Cancel")

    if save:
        roster.save_edit(name, email, class_id)
        st.rerun()
    elif cancel:
        roster.cancel_edit()
        st.rerun()


def render_student_row(roster: RosterView, student: StudentRecord):
    if roster.is_editing(student):
        render_edit_form(roster, student)
        return

    col_info, col_edit, col_delete = st.columns([4, 1, 1])
    with col_info:
        st.markdown(f"**{student.name}**")
        st.caption(f"Email: {student.email}")

    # ownership check is advisory; RLS rejects anything it does not allow
    if not roster.is_teacher_of_class(student.class_id):
        return

    with col_edit:
        if st.button("Edit", key=f"edit_btn_{student.id}", disabled=roster.loading):
            roster.begin_edit(student)
            st.rerun()
    with col_delete:
        if st.button("Delete", key=f"delete_btn_{student.id}", disabled=roster.loading):
            roster.confirm_delete(student)
            st.rerun()


def render_grouped_students(roster: RosterView):
    groups = roster.grouped_students()

    if roster.loading and not roster.students:
        st.info("Loading students...")
        return

    if not groups:
        st.info("No students found or you don't have permission to view them.")
        return

    st.dataframe(
        roster_summary_frame(groups, roster.classes),
        use_container_width=True,
        hide_index=True,
    )

    for class_id, members in groups.items():
        with st.container(border=True):
            render_class_title(class_name(roster.classes, class_id), len(members))
            for student in members:
                render_student_row(roster, student)


###########################################################
#  ROSTER PAGE
###########################################################

def render_roster_page(roster: RosterView, form: CredentialForm, session: AuthSession):
    roster.sync_session(session)

    render_account_bar(form, session)
    render_status(roster.message)
    render_delete_confirmation(roster)

    st.markdown("---")
    render_add_student_form(roster)
    st.markdown("---")
    render_grouped_students(roster)
