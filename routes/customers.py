from datetime import datetime
from flask import Blueprint, request, jsonify
from models.customer import Customer
from utils.http import json_body
from utils.rides import list_rides, create_ride, get_ride, update_ride, delete_ride
from utils.stats import compute_totals, yearly_summary

customers_bp = Blueprint('customers', __name__)

#* ============ Ride Entries ============

@customers_bp.route('/customer', methods=['GET'])
@customers_bp.route('/customers', methods=['GET'])
def list_customers():
    rides = list_rides(request.args.get('sort', '-createdAt'), request.args.get('search'))
    return jsonify([ride.to_dict() for ride in rides])

@customers_bp.route('/customer', methods=['POST'])
@customers_bp.route('/customers', methods=['POST'])
def add_customer():
    ride = create_ride(json_body())
    return jsonify(ride.to_dict()), 201

@customers_bp.route('/customer/<int:customer_id>', methods=['GET'])
def get_customer(customer_id):
    return jsonify(get_ride(customer_id).to_dict())

@customers_bp.route('/customer/<int:customer_id>', methods=['PUT'])
def update_customer(customer_id):
    ride = update_ride(customer_id, json_body())
    return jsonify(ride.to_dict())

@customers_bp.route('/customer/<int:customer_id>', methods=['DELETE'])
def delete_customer(customer_id):
    deleted = delete_ride(customer_id)
    return jsonify({"message": "Customer deleted successfully", "customer": deleted})

#* ============ Summaries ============

@customers_bp.route('/customers/totals', methods=['GET'])
def get_totals():
    totals = compute_totals(Customer.query.all())
    return jsonify({
        "totalCustomers": totals["count"],
        "totalIncome": totals["income"],
        "totalCost": totals["cost"],
        "totalSave": totals["save"],
    })

@customers_bp.route('/customers/monthly', methods=['GET'])
def get_monthly_earnings():
    year = request.args.get('year', type=int) or datetime.now().year
    return jsonify(yearly_summary(Customer.query.all(), year))
