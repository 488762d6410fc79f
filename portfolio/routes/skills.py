from flask import request
from flask_restx import Namespace, Resource

from portfolio.api_responses import created_response, request_payload, success_response
from portfolio.services import get_services

ns_skills = Namespace("skills", description="Skills and skill icons")


@ns_skills.route("")
class SkillList(Resource):
    @ns_skills.doc("list_skills")
    def get(self):
        return success_response(get_services().skills.list())

    @ns_skills.doc("create_skill")
    @ns_skills.response(409, "Skill already exists")
    def post(self):
        return created_response(get_services().skills.create(request_payload()), "Skill created successfully")


@ns_skills.route("/with-icon")
class SkillWithIcon(Resource):
    @ns_skills.doc("create_skill_with_icon")
    def post(self):
        """Create a skill from a multipart form with an `icon` file"""
        skill = get_services().skills.create(request_payload(), icon=request.files.get("icon"))
        return created_response(skill, "Skill created successfully")


@ns_skills.route("/featured")
class FeaturedSkills(Resource):
    @ns_skills.doc("list_featured_skills")
    def get(self):
        return success_response(get_services().skills.featured())


@ns_skills.route("/category/<string:category>")
class SkillsByCategory(Resource):
    @ns_skills.doc("list_skills_by_category")
    def get(self, category):
        return success_response(get_services().skills.by_category(category))


@ns_skills.route("/<string:id>")
@ns_skills.param("id", "The skill ID")
@ns_skills.response(404, "Skill not found")
class SkillItem(Resource):
    @ns_skills.doc("get_skill")
    def get(self, id):
        return success_response(get_services().skills.get(id))

    @ns_skills.doc("update_skill")
    def put(self, id):
        return success_response(get_services().skills.update(id, request_payload()), "Skill updated successfully")

    @ns_skills.doc("delete_skill")
    def delete(self, id):
        get_services().skills.delete(id)
        return success_response(message="Skill deleted successfully")


@ns_skills.route("/<string:id>/with-icon")
@ns_skills.response(404, "Skill not found")
class SkillIcon(Resource):
    @ns_skills.doc("update_skill_with_icon")
    def put(self, id):
        """Partial update from a multipart form; a new `icon` replaces the old one"""
        skill = get_services().skills.update(id, request_payload(), icon=request.files.get("icon"))
        return success_response(skill, "Skill updated successfully")
